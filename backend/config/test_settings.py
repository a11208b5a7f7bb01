from .settings import *  # noqa: F401,F403

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STRIPE_SECRET_KEY = 'sk_test_suite'
STRIPE_CURRENCY = 'usd'

CLOUDINARY_CLOUD_NAME = 'test-cloud'
CLOUDINARY_API_KEY = 'test-key'
CLOUDINARY_API_SECRET = 'test-secret'
