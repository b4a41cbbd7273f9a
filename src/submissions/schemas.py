from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response body serialised with the camelCase keys the site's forms use."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
