"""第三方集成模块"""

from .gemini_api import GeminiAPI, get_gemini_api, close_gemini_api
from .firebase_auth import FirebaseAuthAPI
from .firebase_storage import FirebaseStorageAPI, StorageError

__all__ = [
    "GeminiAPI",
    "get_gemini_api",
    "close_gemini_api",
    "FirebaseAuthAPI",
    "FirebaseStorageAPI",
    "StorageError",
]
