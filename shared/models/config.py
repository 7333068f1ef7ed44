from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    Represents a single configuration parameter required by a client.

    Attributes:
        env_key (str): The raw key of the environment variable, without the client prefix (e.g. "BASE_URL").
        val_type (str): The expected type of the value. Supported types are "string", "number" and "url".
        default (str | int | float | None): An optional default value. If None, the variable is required.
    """

    env_key: str
    val_type: str
    default: str | int | float | None = None
