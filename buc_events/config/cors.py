"""CORS configuration for the FastAPI application."""

import os

from .environment import IS_PRODUCTION_ENVIRONMENT

# CORS Origins configuration
ALLOWED_ORIGINS = {
    False: ["*"],  # Development - allow all
    True: [        # Production - admin dashboard and public site only
        origin.strip()
        for origin in os.environ.get(
            'CORS_ALLOWED_ORIGINS',
            'https://bucindia.com,https://www.bucindia.com,https://admin.bucindia.com'
        ).split(',')
        if origin.strip()
    ]
}

# CORS Methods configuration
ALLOWED_METHODS = [
    "GET",      # Listing events, registrations and the dashboard
    "POST",     # Creating events and registrations
    "PUT",      # Editing events
    "DELETE",   # Removing events and registrations
    "OPTIONS"   # Required for CORS preflight
]

# CORS Headers configuration
ALLOWED_HEADERS = [
    "Authorization",  # Admin key
    "Content-Type",   # For request bodies
    "Accept",        # For content negotiation
]

CORS_CONFIG = {
    "allow_origins": ALLOWED_ORIGINS[IS_PRODUCTION_ENVIRONMENT],
    "allow_credentials": True,
    "allow_methods": ALLOWED_METHODS,
    "allow_headers": ALLOWED_HEADERS,
    "expose_headers": ["Content-Disposition"],
    "max_age": 3600,
}
