"""Business logic for authentication, such as user creation and retrieval."""
from typing import Optional
from . import models

async def get_user_by_mobile_number(mobile_number: str) -> Optional[models.User]:
    """Retrieves a user by their mobile number, the login identifier.

    Args:
        mobile_number: The 10-digit mobile number of the user.

    Returns:
        The User object if found, otherwise None.
    """
    return await models.User.get_or_none(mobile_number=mobile_number)

async def get_user_by_public_id(public_id: str) -> Optional[models.User]:
    return await models.User.get_or_none(public_id=public_id)

async def create_user(user_in: dict, hashed_password_val: str, role: str = models.ROLE_USER) -> models.User:
    """Creates a new user in the database.

    Args:
        user_in: A dictionary containing the user data (excluding password).
        hashed_password_val: The hashed password for the new user.
        role: "user" for self-registration, "admin" from the CLI.

    Returns:
        The newly created User object.
    """
    new_user = await models.User.create(
        **user_in,
        hashed_password=hashed_password_val,
        role=role,
    )
    return new_user
