import environ
import os
from datetime import timedelta
from .base import *  # shared defaults
from corsheaders.defaults import default_headers
from dotenv import load_dotenv
load_dotenv()


# .env is optional; real environment variables take precedence
env = environ.Env(
    DEBUG=(bool, False),
)
environ.Env.read_env(os.path.join(BASE_DIR, '.env'))


SECRET_KEY = env('SECRET_KEY', default=SECRET_KEY)
DEBUG = env.bool('DEBUG', default=False)

# Set ALLOWED_HOSTS explicitly in .env for production deployments
ALLOWED_HOSTS = env.list('ALLOWED_HOSTS', default=['127.0.0.1', 'localhost', 'testserver'])


# Database
# DATABASE_URL examples:
#   sqlite:///db.sqlite3
DATABASES = {
    'default': env.db('DATABASE_URL', default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
}


# SimpleJWT
SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(minutes=env.int('JWT_ACCESS_MINUTES', default=30)),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=env.int('JWT_REFRESH_DAYS', default=1)),
    'AUTH_HEADER_TYPES': ('Bearer',),
}


# CORS
CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = env.list('CORS_ALLOWED_ORIGINS', default=[
    'http://localhost:5173',   # Vite dev server
    'http://127.0.0.1:5173',
    'http://localhost:3000',   # CRA dev server
])
CORS_ALLOW_HEADERS = list(default_headers) + [
    'authorization',
]
CORS_ALLOW_CREDENTIALS = True


# Swagger
SPECTACULAR_SETTINGS = {
    'TITLE': 'LMS API',
    'DESCRIPTION': 'Learning management system API (menus, activities)',
    'VERSION': '1.0.0',
    'USE_SESSION_AUTH': False,
    'SERVE_INCLUDE_SCHEMA': False,
    'SECURITY_SCHEMES': {
        'bearerAuth': {
            'type': 'http',
            'scheme': 'bearer',
            'bearerFormat': 'JWT',
        },
    },
}


# Logging
LOG_LEVEL = env('LOG_LEVEL', default=LOG_LEVEL).upper()
LOGGING['root']['level'] = LOG_LEVEL
LOGGING['loggers']['access']['level'] = LOG_LEVEL
