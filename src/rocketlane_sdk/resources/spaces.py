# src/rocketlane_sdk/resources/spaces.py
from rocketlane_sdk.base.resource import BaseResource
from rocketlane_sdk.models import Space


class SpacesResource(BaseResource[Space]):
    resource_path = "spaces"
    model = Space
    table_name = "spaces"
