from .service import FieldEncodingError, FieldTransformService, restore_field, stringify_field

__all__ = ["FieldEncodingError", "FieldTransformService", "restore_field", "stringify_field"]
