"""
Registre central des routers de l'API.
- Health: /health
- Catalogue: /api/items
- Utilisateur courant: /api/my/user
- Paiements: /api/orders/checkout/*, /api/orders/test-unipaas
- Commandes: /api/orders
"""
from fastapi import FastAPI
from storefront.health.router import router as health_router
from storefront.items import views as items_views
from storefront.users import views as users_views
from storefront.payments import views as payments_views
from storefront.orders import views as orders_views


def register_routers(app: FastAPI) -> None:
    """
    Agrège tous les routers de l'application.
    L'ordre compte: payments partage le préfixe /api/orders et doit passer avant
    /api/orders/{order_id}.
    """
    app.include_router(health_router)
    app.include_router(items_views.router)
    app.include_router(users_views.router)
    app.include_router(payments_views.router)
    app.include_router(orders_views.router)
