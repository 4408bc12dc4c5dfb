"""Centralized constants used across the application.

Defines suite names, default SDK configurations and fixed probe payloads.
"""

from __future__ import annotations

# Diagnostic suites that ship with the application
FIREBASE_SUITE = "firebase"
GEMINI_SUITE = "gemini"
SUPPORTED_SUITES = (FIREBASE_SUITE, GEMINI_SUITE)

# Firebase web configuration used for the first run and for "restore default".
# Placeholders only; override firebase.default_config in app_config.yaml.
DEFAULT_FIREBASE_CONFIG = {
    "apiKey": "YOUR_FIREBASE_WEB_API_KEY",
    "authDomain": "your-project-id.firebaseapp.com",
    "projectId": "your-project-id",
    "storageBucket": "your-project-id.firebasestorage.app",
    "messagingSenderId": "000000000000",
    "appId": "1:000000000000:web:0000000000000000000000",
}

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

DEFAULT_GEMINI_CONFIG = {
    "apiKey": "YOUR_GEMINI_API_KEY",
    "model": DEFAULT_GEMINI_MODEL,
}

# Keys that must be present (and non-empty) for each suite
FIREBASE_REQUIRED_KEYS = ("apiKey", "projectId")
GEMINI_REQUIRED_KEYS = ("apiKey",)

# Keys whose values are masked in display projections
SECRET_CONFIG_KEYS = frozenset({"apiKey"})

DEFAULT_FIREBASE_APP_NAME = "sdkprobe-diagnostics"

# Optional Firebase config entry naming a service account key file
FIREBASE_CREDENTIALS_KEY = "serviceAccount"

# 1x1 red pixel used by the vision probe
SAMPLE_IMAGE_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8BQDwAEhQGAhKmMIQAAAABJRU5ErkJggg=="
)
SAMPLE_IMAGE_MIME_TYPE = "image/png"
