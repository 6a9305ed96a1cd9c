from .config import LogLevel, ProviderConfig, load_config_from_env
from .diagnostics import Diagnostic, Diagnostics, Severity
from .exceptions import (
    ConfigurationError,
    NameParseError,
    PlayIAMError,
    RemoteAPIError,
    RemoteTransportError,
)
from .logging import (
    PlayIAMFormatter,
    ResourceLoggerAdapter,
    get_resource_logger,
    redact_secrets,
    safe_log_value,
    safe_preview,
    setup_logging,
)
from .names import (
    GrantName,
    UserName,
    format_grant_name,
    format_user_name,
    parse_grant_name,
    parse_user_name,
)
from .permissions import (
    PERMISSION_CATALOG,
    AppPermissions,
    DeveloperPermissions,
    ImplicationGraph,
    ImplicitGrant,
    PermissionCatalog,
    PermissionScope,
    expand_permissions,
    implicit_grants,
    permission_sets_equal,
)
from .client import GooglePlayUsersClient, Grant, User
from .resources import (
    AppIAMModel,
    AppIAMResource,
    CreateRequest,
    DeleteRequest,
    ReadRequest,
    ResourceResponse,
    UpdateRequest,
    UserDataSource,
    UserModel,
    UserResource,
    UsersDataSource,
)
from .provider import GooglePlayProvider

__all__ = [
    'LogLevel',
    'ProviderConfig',
    'load_config_from_env',
    'Diagnostic',
    'Diagnostics',
    'Severity',
    'ConfigurationError',
    'NameParseError',
    'PlayIAMError',
    'RemoteAPIError',
    'RemoteTransportError',
    'PlayIAMFormatter',
    'ResourceLoggerAdapter',
    'get_resource_logger',
    'redact_secrets',
    'safe_log_value',
    'safe_preview',
    'setup_logging',
    'GrantName',
    'UserName',
    'format_grant_name',
    'format_user_name',
    'parse_grant_name',
    'parse_user_name',
    'PERMISSION_CATALOG',
    'AppPermissions',
    'DeveloperPermissions',
    'ImplicationGraph',
    'ImplicitGrant',
    'PermissionCatalog',
    'PermissionScope',
    'expand_permissions',
    'implicit_grants',
    'permission_sets_equal',
    'GooglePlayUsersClient',
    'Grant',
    'User',
    'AppIAMModel',
    'AppIAMResource',
    'CreateRequest',
    'DeleteRequest',
    'ReadRequest',
    'ResourceResponse',
    'UpdateRequest',
    'UserDataSource',
    'UserModel',
    'UserResource',
    'UsersDataSource',
    'GooglePlayProvider',
]
