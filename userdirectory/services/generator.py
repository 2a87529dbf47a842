"""Deterministic user dataset generator."""

from typing import List

from userdirectory.core.exceptions import InvalidArgumentError
from userdirectory.models.user import User

FIRST_NAMES = (
    "Alice", "Bob", "Charlie", "Diana", "Ethan", "Fiona", "George", "Hannah",
    "Ishan", "Jaya", "Karan", "Lina", "Mohan", "Nisha", "Omar", "Priya",
    "Quinn", "Ravi", "Sara", "Tanya", "Uma", "Vikram", "Walt", "Xena",
    "Yash", "Zara",
)
LAST_NAMES = (
    "Patel", "Sharma", "Gupta", "Kumar", "Singh", "Bose", "Reddy", "Das",
    "Ghosh", "Iyer", "Mehta", "Kapoor", "Nair", "Khan", "Ibrahim",
)
DOMAINS = (
    "example.com", "gmail.com", "reqres.in", "hotmail.com", "yahoo.com",
    "company.org",
)

AVATAR_URL = "https://i.pravatar.cc/150?img={}"


def build_user(user_id: int) -> User:
    """Derive the record for ``user_id``; a pure function of the id."""
    first = FIRST_NAMES[(user_id * 3) % len(FIRST_NAMES)]
    last = LAST_NAMES[(user_id * 7) % len(LAST_NAMES)]
    domain = DOMAINS[(user_id * 5) % len(DOMAINS)]

    return User(
        id=user_id,
        first_name=first,
        last_name=last,
        email=f"{first.lower()}.{last.lower()}{user_id % 9}@{domain}",
        avatar_url=AVATAR_URL.format((user_id % 70) + 1),
    )


def generate_users(count: int) -> List[User]:
    """Generate ``count`` users with ids ``1..count``.

    Raises:
        InvalidArgumentError: if count is not a positive integer
    """
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise InvalidArgumentError(f"User count must be a positive integer, got {count!r}")

    return [build_user(i) for i in range(1, count + 1)]
