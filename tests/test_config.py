import os


DEFAULT_PASSWORD = os.environ.get("TEST_DEFAULT_PASSWORD", "123")

ROLE_EMAILS = {
    "staff": os.environ.get("TEST_STAFF_EMAIL", "joao@empresa.com"),
    "other_staff": os.environ.get("TEST_OTHER_STAFF_EMAIL", "maria@empresa.com"),
    "purchaser": os.environ.get("TEST_PURCHASER_EMAIL", "compras@empresa.com"),
}

ROLE_PASSWORDS = {
    "staff": os.environ.get("TEST_STAFF_PASSWORD", DEFAULT_PASSWORD),
    "other_staff": os.environ.get("TEST_OTHER_STAFF_PASSWORD", DEFAULT_PASSWORD),
    "purchaser": os.environ.get("TEST_PURCHASER_PASSWORD", DEFAULT_PASSWORD),
}


def get_credentials(role: str) -> dict:
    email = ROLE_EMAILS.get(role)
    password = ROLE_PASSWORDS.get(role, DEFAULT_PASSWORD)
    return {"email": email, "password": password}
