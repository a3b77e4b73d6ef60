"""Dashboard Service - record counts for the owner's overview page"""
from plotdesk.core.constants import Views
from plotdesk.schemas import Contact, DashboardSummary, Inquiry, Plot, Registration, User
from plotdesk.services.view_cache import ViewCache, view_cache
from plotdesk.storage.base import DataStore


class DashboardService:

    def __init__(self, store: DataStore, cache: ViewCache = view_cache):
        self.store = store
        self.cache = cache

    async def get_summary(self) -> DashboardSummary:
        cached = self.cache.get(Views.DASHBOARD)
        if cached is not None:
            return cached

        registrations = await self.store.list(Registration)
        summary = DashboardSummary(
            plots=len(await self.store.list(Plot)),
            users=len(await self.store.list(User)),
            contacts=len(await self.store.list(Contact)),
            inquiries=len(await self.store.list(Inquiry)),
            registrations=len(registrations),
            new_registrations=sum(1 for r in registrations if r.is_new),
        )
        self.cache.set(Views.DASHBOARD, summary)
        return summary
