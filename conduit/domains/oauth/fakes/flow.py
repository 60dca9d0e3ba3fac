"""Fake OAuthFlowImplementation for testing."""

from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from conduit.schemas.connector import OAuthConfigSpecification


class FakeOAuthFlow:
    """In-memory fake for OAuthFlowImplementation.

    Records every call with its arguments. The consent URL and completion
    result can be seeded; an exception can be seeded to simulate a failing
    provider.
    """

    def __init__(self) -> None:
        self._calls: List[Tuple[str, Dict[str, Any]]] = []
        self._consent_url: str = "https://provider.example.com/consent"
        self._completion_result: Dict[str, Any] = {"access_token": "fake_access_token"}
        self._error: Optional[Exception] = None

    def seed_consent_url(self, url: str) -> None:
        self._consent_url = url

    def seed_completion_result(self, result: Dict[str, Any]) -> None:
        self._completion_result = result

    def seed_error(self, error: Exception) -> None:
        self._error = error

    @property
    def calls(self) -> List[Tuple[str, Dict[str, Any]]]:
        return list(self._calls)

    def last_call(self, name: str) -> Dict[str, Any]:
        for call_name, kwargs in reversed(self._calls):
            if call_name == name:
                return kwargs
        raise AssertionError(f"{name} was not called. Calls: {[c[0] for c in self._calls]}")

    async def get_source_consent_url(
        self,
        workspace_id: UUID,
        definition_id: UUID,
        redirect_url: str,
        input_configuration: Dict[str, Any],
        oauth_config_specification: Optional[OAuthConfigSpecification],
    ) -> str:
        return self._consent("get_source_consent_url", locals())

    async def get_destination_consent_url(
        self,
        workspace_id: UUID,
        definition_id: UUID,
        redirect_url: str,
        input_configuration: Dict[str, Any],
        oauth_config_specification: Optional[OAuthConfigSpecification],
    ) -> str:
        return self._consent("get_destination_consent_url", locals())

    async def complete_source_oauth(
        self,
        workspace_id: UUID,
        definition_id: UUID,
        query_params: Dict[str, Any],
        redirect_url: str,
        input_configuration: Optional[Dict[str, Any]] = None,
        oauth_config_specification: Optional[OAuthConfigSpecification] = None,
    ) -> Dict[str, Any]:
        return self._complete("complete_source_oauth", locals())

    async def complete_destination_oauth(
        self,
        workspace_id: UUID,
        definition_id: UUID,
        query_params: Dict[str, Any],
        redirect_url: str,
        input_configuration: Optional[Dict[str, Any]] = None,
        oauth_config_specification: Optional[OAuthConfigSpecification] = None,
    ) -> Dict[str, Any]:
        return self._complete("complete_destination_oauth", locals())

    def _record(self, name: str, arguments: Dict[str, Any]) -> None:
        self._calls.append((name, {k: v for k, v in arguments.items() if k != "self"}))
        if self._error is not None:
            raise self._error

    def _consent(self, name: str, arguments: Dict[str, Any]) -> str:
        self._record(name, arguments)
        return self._consent_url

    def _complete(self, name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
        self._record(name, arguments)
        return dict(self._completion_result)
