"""Reconciles caller-supplied OAuth input with the stored connector configuration.

When a user re-authenticates an existing source or destination, the client
only knows masked placeholders for secrets it was shown earlier. Before the
input reaches an OAuth provider, every top-level placeholder is swapped for
the value stored in the hydrated configuration.
"""

from typing import Any, Dict, Mapping, Optional

from conduit.core.constants.secrets import SECRETS_MASK
from conduit.core.logging import ContextualLogger, logger
from conduit.domains.oauth.exceptions import InvalidJsonPathError
from conduit.domains.oauth.json_paths import get_single_value
from conduit.domains.oauth.paths import (
    FieldPathMap,
    build_json_path_from_oauth_flow_init_parameters,
    extract_oauth_configuration_paths,
)
from conduit.schemas.connector import ConnectorSpecification

reconciler_logger = logger.with_prefix("OAuth: ").with_context(component="oauth_reconciler")


def _is_mask(value: Any) -> bool:
    return isinstance(value, str) and value == SECRETS_MASK


def get_oauth_input_configuration(
    hydrated_configuration: Optional[Mapping[str, Any]],
    paths_to_get: FieldPathMap,
    log: Optional[ContextualLogger] = None,
) -> Dict[str, Any]:
    """Resolve each field's path against the stored configuration.

    Only fields whose path addresses exactly one value are returned; the
    rest are logged and dropped.
    """
    log = log or reconciler_logger
    result: Dict[str, Any] = {}
    for field_name, path in paths_to_get.items():
        if hydrated_configuration is None:
            log.warning(f"Missing the key {field_name}: no stored configuration")
            continue
        try:
            match = get_single_value(hydrated_configuration, path)
        except InvalidJsonPathError as e:
            log.warning(f"Missing the key {field_name} from the stored configuration: {e}")
            continue
        if match.found:
            result[field_name] = match.value
        else:
            log.warning(f"Missing the key {field_name} from the stored configuration")
    return result


def get_oauth_from_db_if_needed(
    oauth_input_configuration_from_db: Mapping[str, Any],
    oauth_input_configuration_from_input: Optional[Mapping[str, Any]],
    log: Optional[ContextualLogger] = None,
) -> Dict[str, Any]:
    """Replace masked top-level input values with their stored counterparts.

    Masked values nested inside objects are passed through untouched.
    Masked fields without a usable stored value are dropped; a stored value
    that is itself the mask counts as missing.
    """
    log = log or reconciler_logger
    result: Dict[str, Any] = {}
    for key, value in (oauth_input_configuration_from_input or {}).items():
        if _is_mask(value):
            if key not in oauth_input_configuration_from_db:
                log.warning(f"Missing the key {key} in the stored configuration")
            elif _is_mask(oauth_input_configuration_from_db[key]):
                log.warning(f"Stored value of the key {key} is masked")
            else:
                result[key] = oauth_input_configuration_from_db[key]
        else:
            result[key] = value
    return result


def get_oauth_input_configuration_for_consent(
    spec: ConnectorSpecification,
    hydrated_configuration: Optional[Mapping[str, Any]],
    oauth_input_configuration: Optional[Mapping[str, Any]],
    log: Optional[ContextualLogger] = None,
) -> Dict[str, Any]:
    """Build the input configuration sent to the provider for an existing actor.

    ``spec`` must declare an OAuth config specification.
    """
    oauth_config_specification = spec.advanced_auth.oauth_config_specification
    fields_to_get = build_json_path_from_oauth_flow_init_parameters(
        extract_oauth_configuration_paths(
            oauth_config_specification.oauth_user_input_from_connector_config_specification
        )
    )
    from_db = get_oauth_input_configuration(hydrated_configuration, fields_to_get, log)
    return get_oauth_from_db_if_needed(from_db, oauth_input_configuration, log)
