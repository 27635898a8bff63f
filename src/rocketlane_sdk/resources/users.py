# src/rocketlane_sdk/resources/users.py
from rocketlane_sdk.base.resource import BaseResource
from rocketlane_sdk.models import User


class UsersResource(BaseResource[User]):
    resource_path = "users"
    model = User
    table_name = "users"
