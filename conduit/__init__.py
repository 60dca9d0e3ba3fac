"""Conduit: OAuth consent and token-exchange orchestration for the connector catalog."""
