from identity.api.routes.admin_applications import router as admin_applications_router
from identity.api.routes.admin_tenants import router as admin_tenants_router
from identity.api.routes.admin_users import router as admin_users_router
from identity.api.routes.apps import router as apps_router
from identity.api.routes.auth import router as auth_router
from identity.api.routes.team import router as team_router

routers = [
    auth_router,
    apps_router,
    team_router,
    admin_tenants_router,
    admin_applications_router,
    admin_users_router,
]

__all__ = ["routers"]
