# src/rocketlane_sdk/resources/fields.py
from rocketlane_sdk.base.resource import BaseResource
from rocketlane_sdk.models import CustomField


class FieldsResource(BaseResource[CustomField]):
    resource_path = "fields"
    model = CustomField
    table_name = "fields"
