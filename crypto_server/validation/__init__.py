from .validator import SchemaRegistry, get_schema_registry, is_json_payload, is_signed_payload

__all__ = ["SchemaRegistry", "get_schema_registry", "is_json_payload", "is_signed_payload"]
