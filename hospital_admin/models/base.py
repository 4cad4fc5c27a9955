from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Calendar dates travel as YYYY-MM-DD strings and times of day as HH:MM.
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^\d{2}:\d{2}(:\d{2})?$"

class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
