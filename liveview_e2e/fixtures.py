"""Test users shared by the E2E suites.

Values match the accounts seeded by the application's test seeds.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TestUser:
    __test__ = False

    username: str
    password: str
    email: str
    role: str


ADMIN = TestUser(
    username="admin",
    password="admin",
    email="admin@example.com",
    role="admin",
)
USER = TestUser(
    username="testuser",
    password="testpass",
    email="testuser@example.com",
    role="user",
)

TEST_USERS = {
    "admin": ADMIN,
    "user": USER,
}
