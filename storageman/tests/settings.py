"""Minimal Django settings for running the Storageman test suite."""

SECRET_KEY = 'storageman-tests'

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'storageman',
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
USE_TZ = True
TIME_ZONE = 'UTC'

STORAGEMAN = {
    'BLOCK_INSERT_BATCH_SIZE': 6,
    'ACTIVITY_PAGE_SIZE': 20,
}
