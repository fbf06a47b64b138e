"""Shared utilities."""

from client_auth.utils.json_serializers import encode_json_body, json_serializer

__all__ = ["json_serializer", "encode_json_body"]
