import io
from functools import lru_cache
from typing import List, Type, TypeVar

from pydantic import (
    BaseSettings,
    Field,
    PositiveInt,
    ValidationError,
)

from .exception import ShallowTeeConfigurationError


class TeeSettings(BaseSettings):
    copy_chunk_size: PositiveInt = Field(io.DEFAULT_BUFFER_SIZE)
    """The largest number of bytes read from a source at once while a forward seek copies it into a sink"""

    @classmethod
    def usage(cls) -> str:
        """
        Return a formatted string with configuration usage information.
        """
        header = f"""
Usage: Provide listed configuration variables as either environment
variables, in a '.env' file, or as a mixture of the two. Environment
variables take priority over values in the '.env' file.

Configuration option names are case insensitive and carry the
{cls.Config.env_prefix!r} prefix.

Configuration Variable:
"""
        items = [field_usage(cls, field_name) for field_name in cls.__fields__.keys()]
        config_vars = "\n".join(items)
        return f"{header}\n{config_vars}"

    class Config(BaseSettings.Config):
        frozen = True
        case_sensitive = False
        env_prefix = "SHALLOWTEE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        fields = {
            "copy_chunk_size": {
                "description": "The largest number of bytes read from a source at once while a forward seek copies "
                               "it into a sink"
            },
        }


@lru_cache
def tee_settings() -> TeeSettings:
    return _handle_settings(TeeSettings)


_T = TypeVar("_T", bound=BaseSettings)


def _handle_settings(cls: Type[_T], **kwargs) -> _T:
    try:
        return cls(**kwargs)
    except ValidationError as e:
        usage: List[str] = []
        for err in e.errors():
            field_name: str = err["loc"][0]
            msg = f"{field_usage(cls, field_name)}\nError: {err['msg']}\n"
            usage.append(msg)
        error_msg = "\n".join(usage)
        raise ShallowTeeConfigurationError(f"Invalid shallowtee configuration: {error_msg}") from e


def field_usage(cls: Type[BaseSettings], field_name: str) -> str:
    field_schema = cls.schema(by_alias=False)["properties"][field_name]
    field = cls.__fields__[field_name]

    names = ",".join(name.upper() for name in field_schema["env_names"])
    type_ = field_schema["type"]

    if field.required:
        requirement = " (required)"
    elif field.get_default() is None:
        requirement = " (optional)"
    else:
        default = field.get_default()
        if isinstance(default, str):
            default = repr(default)
        requirement = f" (default={default})"

    description = (
        f"\n\t{field_schema['description']}" if "description" in field_schema else ""
    )

    return f"{names}: {type_}{requirement}{description}"
