"""
ASGI entrypoint: expose `app` pour les process managers / déploiements.

En production, un process manager (gunicorn + uvicorn workers, hypercorn) importe
`storefront.asgi:app`. Toute la configuration est centralisée dans la factory.
"""

from storefront.app import app

if __name__ == "__main__":
    import os
    import uvicorn
    uvicorn.run(
        "storefront.asgi:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,
    )
