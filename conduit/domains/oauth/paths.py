"""Locating OAuth user inputs inside a connector configuration.

A connector's ``oauth_user_input_from_connector_config_specification``
lists the fields its OAuth flow needs from the connector configuration,
each with a ``path_in_connector_config``::

    {
        "type": "object",
        "properties": {
            "client_id": {"path_in_connector_config": ["credentials", "client_id"]}
        }
    }

These helpers turn that schema into a ``FieldPathMap`` of
``field name -> "$.credentials.client_id"``.
"""

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence

from conduit.domains.oauth.exceptions import OAuthSpecificationError
from conduit.domains.oauth.json_paths import ROOT

PROPERTIES = "properties"
PATH_IN_CONNECTOR_CONFIG = "path_in_connector_config"

FieldPathMap = Mapping[str, str]


def extract_oauth_configuration_paths(
    schema: Optional[Mapping[str, Any]],
) -> Dict[str, List[str]]:
    """Collect ``field name -> path segments`` from an OAuth user-input schema.

    Properties without ``path_in_connector_config`` are skipped. A missing
    schema or one without properties yields an empty mapping.

    Raises:
        OAuthSpecificationError: If the schema, its properties, or a declared
            path has the wrong shape.
    """
    if schema is None:
        return {}
    if not isinstance(schema, Mapping):
        raise OAuthSpecificationError("user input specification must be an object")
    properties = schema.get(PROPERTIES)
    if properties is None:
        return {}
    if not isinstance(properties, Mapping):
        raise OAuthSpecificationError(f"'{PROPERTIES}' must be an object")

    result: Dict[str, List[str]] = {}
    for field_name, field_schema in properties.items():
        if not isinstance(field_schema, Mapping) or PATH_IN_CONNECTOR_CONFIG not in field_schema:
            continue
        path = field_schema[PATH_IN_CONNECTOR_CONFIG]
        if not isinstance(path, list) or not all(isinstance(part, str) for part in path):
            raise OAuthSpecificationError(
                f"'{PATH_IN_CONNECTOR_CONFIG}' of '{field_name}' must be a list of strings"
            )
        result[field_name] = list(path)
    return result


def build_json_path_from_oauth_flow_init_parameters(
    oauth_flow_init_parameters: Mapping[str, Sequence[str]],
) -> FieldPathMap:
    """Translate path segment lists into path expressions.

    Segments are joined with "." under the "$." root marker without any
    validation; an empty segment list yields the bare "$." marker.
    """
    return MappingProxyType(
        {
            field_name: f"{ROOT}." + ".".join(segments)
            for field_name, segments in oauth_flow_init_parameters.items()
        }
    )
