# Public API
from paramtree.builder import ABOVE_ALL, Schema, SchemaBuilder, build_schema
from paramtree.config import get_settings
from paramtree.errors import (
    CoercionError,
    ParamsError,
    RequiredFieldMissing,
    SchemaDefinitionError,
    ValidationError,
)
from paramtree.logging import configure_logging, get_logger, compiler_logger, runtime_logger
from paramtree.pipeline import ParamsPipeline, parse
from paramtree.resolver import pipe
from paramtree.runtime import parse_params
from paramtree.scope import ScopeStack
from paramtree.structs import (
    Action,
    Information,
    Nested,
    Parameter,
    Runtime,
    Validator,
    ValidatorInformation,
    ValidatorRuntime,
)
from paramtree.types import Coercer, TypeRegistry, default_types
from paramtree.validators import CrossFieldValidator, FieldValidator, ValidatorRegistry, default_validators

__version__ = "0.1.0"
