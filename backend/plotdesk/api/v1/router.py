from fastapi import APIRouter
from plotdesk.api.v1.endpoints import ai, auth, contacts, dashboard, health, inquiries, plots, registrations, users

api_router = APIRouter()

api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(plots.router, prefix="/plots", tags=["Plots"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(contacts.router, prefix="/contacts", tags=["Contacts"])
api_router.include_router(registrations.router, prefix="/registrations", tags=["Registrations"])
api_router.include_router(inquiries.router, prefix="/inquiries", tags=["Inquiries"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(ai.router, prefix="/ai", tags=["AI"])
