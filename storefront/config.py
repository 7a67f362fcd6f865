# storefront.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

"""
Configuration centrale de l'API boutique.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets/URLs (Supabase, UniPaas), CORS/hosts
- Fournit l'URL du frontend pour construire les redirections du checkout
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _env_flag(name: str, default: str = "false") -> bool:
    return _clean_env(os.getenv(name, default)).lower() in ("1", "true", "yes")

# Supabase: URL (chaîne de connexion de la base) et clés
# - SUPABASE_URL peut parfois être sans schéma: on préfixe en https:// si nécessaire
SUPABASE_URL = _clean_env(os.getenv("SUPABASE_URL") or "")
SUPABASE_ANON = _clean_env(os.getenv("SUPABASE_ANON_KEY") or os.getenv("SUPABASE_KEY") or "")
SUPABASE_SERVICE_KEY = _clean_env(os.getenv("SUPABASE_SERVICE_KEY") or "")

if SUPABASE_URL and not SUPABASE_URL.startswith("http"):
    SUPABASE_URL = "https://" + SUPABASE_URL
if SUPABASE_URL.endswith("/"):
    SUPABASE_URL = SUPABASE_URL.rstrip("/")

COOKIE_SECURE = _env_flag("COOKIE_SECURE")

# CORS (liste blanche du frontend) et hôtes acceptés
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h.strip()]

# Frontend: base des URLs de succès/annulation et de la page de simulation
FRONTEND_URL = _clean_env(os.getenv("FRONTEND_URL") or "http://localhost:5173").rstrip("/")

# UniPaas: API de paiement (sandbox par défaut) et secret partagé du webhook
UNIPAAS_API_URL = _clean_env(os.getenv("UNIPAAS_API_URL") or os.getenv("UNIPAAS_SANDBOX_URL") or "https://sandbox.unipaas.com").rstrip("/")
UNIPAAS_API_KEY = _clean_env(os.getenv("UNIPAAS_API_KEY") or "")
UNIPAAS_SECRET_KEY = _clean_env(os.getenv("UNIPAAS_SECRET_KEY") or "")
UNIPAAS_TIMEOUT = float(_clean_env(os.getenv("UNIPAAS_TIMEOUT") or "10"))
# Signature webhook: consultative (sandbox) sauf si explicitement imposée
UNIPAAS_ENFORCE_WEBHOOK_SIGNATURE = _env_flag("UNIPAAS_ENFORCE_WEBHOOK_SIGNATURE")

PAYMENT_CURRENCY = _clean_env(os.getenv("PAYMENT_CURRENCY") or "USD")
PAYMENT_COUNTRY = _clean_env(os.getenv("PAYMENT_COUNTRY") or "US")

# Taxe fixe appliquée à la création de commande (non configurable)
TAX_RATE = 0.07
