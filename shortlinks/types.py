from datetime import datetime
from typing import Any
from collections.abc import Callable

from botocore.client import BaseClient


# Type aliases for Python dictionaries
type LambdaEvent = dict[str, Any]
type LambdaContext = Any
type LambdaResponse = dict[str, Any]
type LambdaConfiguration = dict[str, Any]
type AppConfig = dict[str, Any]

# Wire representation of models (camelCase JSON objects)
type JSONRecord = dict[str, Any]

# Injected clock: zero-argument callable returning an aware datetime
type Clock = Callable[[], datetime]

# Type aliases for boto3 clients
type AppConfigDataClient = BaseClient
