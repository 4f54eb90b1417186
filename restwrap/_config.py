from os import environ as env
from typing import Optional

from pydantic import BaseModel, ValidationError

from ._utils.constants import ENV_DEBUG, ENV_USER_AGENT
from .models.errors import ConfigError


class Config(BaseModel):
    debug: bool = False
    # None sends restwrap/<installed version>
    user_agent: Optional[str] = None


def load_config(
    *,
    debug: Optional[bool] = None,
    user_agent: Optional[str] = None,
) -> Config:
    """Builds a Config from explicit arguments, falling back to the environment."""
    debug_value = debug if debug is not None else env.get(ENV_DEBUG, False)
    user_agent_value = user_agent or env.get(ENV_USER_AGENT) or None

    try:
        return Config(debug=debug_value, user_agent=user_agent_value)  # type: ignore
    except ValidationError as e:
        for error in e.errors():
            if error["loc"] and error["loc"][0] == "debug":
                raise ConfigError(
                    f"{ENV_DEBUG} must be a boolean, got {debug_value!r}"
                ) from e
        raise ConfigError() from e
