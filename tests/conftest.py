"""Test environment: set before hrdesk is imported so cached settings pick it up."""

import os

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-signing-secret-0123456789abcdef"
os.environ["JWT_EXPIRE_MINUTES"] = "60"
# Lowest bcrypt cost keeps the suite fast; production default is 12.
os.environ["BCRYPT_ROUNDS"] = "4"
