"""
Unit Tests for the management CLI
"""
import asyncio

import pytest

from cli.main import create_parser, main
from plotdesk.core.constants import UserRole
from plotdesk.schemas import User
from plotdesk.storage import FileStore, SqlStore


class TestParser:

    def test_serve_defaults(self):
        args = create_parser().parse_args(['serve', '--port', '9000'])

        assert args.command == 'serve'
        assert args.port == 9000
        assert args.reload is False

    def test_migrate_options(self):
        args = create_parser().parse_args(['migrate', '--data-dir', 'old', '--force'])

        assert args.command == 'migrate'
        assert args.data_dir == 'old'
        assert args.force is True

    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 1
        assert 'plotdesk' in capsys.readouterr().out


class TestCommands:

    def test_migrate_missing_data_dir(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(['migrate', '--data-dir', str(tmp_path / 'nope'), '--database-url', 'sqlite+aiosqlite://'])

        assert exc_info.value.code == 1

    def test_migrate(self, tmp_path):
        async def prepare():
            source = FileStore(tmp_path / 'data')
            await source.init()
            await source.create(User, {'email': 'owner@example.com', 'role': UserRole.OWNER})

        async def users_in(url):
            target = SqlStore(url)
            try:
                return await target.list(User)
            finally:
                await target.close()

        asyncio.run(prepare())
        url = f"sqlite+aiosqlite:///{tmp_path / 'plotdesk.db'}"

        with pytest.raises(SystemExit) as exc_info:
            main(['migrate', '--data-dir', str(tmp_path / 'data'), '--database-url', url])

        assert exc_info.value.code == 0
        assert [u.email for u in asyncio.run(users_in(url))] == ['owner@example.com']

    def test_migrate_reports_storage_failure(self, tmp_path, capsys):
        data_dir = tmp_path / 'data'
        data_dir.mkdir()
        (data_dir / 'plots.json').write_text('[{"id": "1", "plotNum', encoding='utf-8')
        url = f"sqlite+aiosqlite:///{tmp_path / 'plotdesk.db'}"

        with pytest.raises(SystemExit) as exc_info:
            main(['migrate', '--data-dir', str(data_dir), '--database-url', url])

        assert exc_info.value.code == 1
        output = capsys.readouterr().out
        assert 'Migration failed' in output
        assert 'Traceback' not in output
