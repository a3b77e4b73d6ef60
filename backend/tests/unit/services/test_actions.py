"""
Unit Tests for the action boundary
"""
from plotdesk.core.constants import Messages
from plotdesk.core.exceptions import ConflictError, StorageError, ValidationError
from plotdesk.schemas.common import ActionState
from plotdesk.services.actions import action


@action("succeeds")
async def succeeds() -> ActionState:
    return ActionState.ok("done", status_code=201)


@action("conflicts")
async def conflicts() -> ActionState:
    raise ConflictError("taken")


@action("invalid")
async def invalid() -> ActionState:
    raise ValidationError("bad input", errors={"name": ["Name is required."]})


@action("storage")
async def storage_fails() -> ActionState:
    raise StorageError("/var/data/plots.json is corrupt", collection="plots")


@action("crashes")
async def crashes() -> ActionState:
    raise KeyError("secret-internal-detail")


class TestActionBoundary:

    async def test_result_passes_through(self):
        state = await succeeds()

        assert state.success is True
        assert state.status_code == 201

    async def test_domain_error_becomes_failure(self):
        state = await conflicts()

        assert state.success is False
        assert state.status_code == 409
        assert state.message == "taken"
        assert state.errors is None

    async def test_field_errors_are_kept(self):
        state = await invalid()

        assert state.success is False
        assert state.errors == {"name": ["Name is required."]}

    async def test_storage_error_is_reported_generically(self):
        state = await storage_fails()

        assert state.success is False
        assert state.status_code == 500
        assert state.message == Messages.INTERNAL_ERROR
        assert "plots.json" not in state.model_dump_json()

    async def test_unexpected_error_is_reported_generically(self):
        state = await crashes()

        assert state.success is False
        assert state.code == "INTERNAL_ERROR"
        assert state.message == Messages.INTERNAL_ERROR
        assert "secret-internal-detail" not in state.model_dump_json()
