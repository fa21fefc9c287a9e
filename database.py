import base64
import json
import os

import firebase_admin
from firebase_admin import credentials, firestore

from utils.logger_config import logger

# Configuration

PLAYERS_COLLECTION = "updated_players"
# Single-tier documents from before gamemodes existed, see migrate_legacy_players
LEGACY_PLAYERS_COLLECTION = "players"


def load_credentials():
    """Decodes the base64 service account JSON, returns None if unset."""
    b64_creds = os.getenv("FIREBASE_CREDENTIALS_BASE64")
    if not b64_creds:
        return None
    b64_creds = b64_creds.strip()
    missing_padding = len(b64_creds) % 4
    if missing_padding:
        b64_creds += "=" * (4 - missing_padding)
    json_str = base64.b64decode(b64_creds).decode("utf-8")
    return json.loads(json_str)


def database_startup():
    if not firebase_admin._apps:
        try:
            cred_info = load_credentials()
            if cred_info:
                cred = credentials.Certificate(cred_info)
                firebase_admin.initialize_app(cred)
                logger.info("✅ Firebase initialized successfully!")
                return firestore.client()
            else:
                logger.error("❌ ERROR: No Firebase credentials found.")
                return None
        except Exception as e:
            logger.exception(f"❌ ERROR: initializing Firebase: {e}")
            return None
    return firestore.client()
