# src/infrastructure/config/validators/schema_validator.py
import copy
import jsonschema
import logging
from typing import Dict, Any, Tuple, List


class SchemaValidator:
    """
    Validates configuration data against JSON schemas.
    """
    def __init__(self):
        """Initialize the schema validator."""
        self.logger = logging.getLogger(__name__)

    def validate(self, config: Dict[str, Any], schema: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Validate a configuration against a JSON schema.

        Args:
            config: The configuration dictionary to validate
            schema: The JSON schema to validate against

        Returns:
            Tuple of (is_valid, error_messages)
        """
        try:
            validator_cls = jsonschema.validators.validator_for(schema)
            validator_cls.check_schema(schema)
        except jsonschema.exceptions.SchemaError as e:
            self.logger.error(f"Invalid schema: {e.message}")
            return False, [f"Schema error: {e.message}"]

        errors = []
        for error in sorted(validator_cls(schema).iter_errors(config), key=lambda e: list(e.path)):
            error_path = '.'.join(str(p) for p in error.path) if error.path else 'root'
            errors.append(f"At {error_path}: {error.message}")

        for message in errors:
            self.logger.error(f"Schema validation error: {message}")
        return not errors, errors

    def validate_with_defaults(self, config: Dict[str, Any],
                               schema: Dict[str, Any]) -> Tuple[bool, List[str], Dict[str, Any]]:
        """
        Fill in default values from the schema, then validate.

        Args:
            config: The configuration dictionary to validate
            schema: The JSON schema to validate against

        Returns:
            Tuple of (is_valid, error_messages, updated_config); the input
            config is not modified
        """
        updated_config = copy.deepcopy(config)
        self._apply_defaults(updated_config, schema)

        is_valid, errors = self.validate(updated_config, schema)
        return is_valid, errors, updated_config

    def _apply_defaults(self, config: Dict[str, Any], schema: Dict[str, Any]):
        """
        Recursively copy ``default`` values of object properties into config.

        Nested objects that are absent are created when their schema declares
        properties, so their own defaults can be filled in.
        """
        if not isinstance(config, dict) or not isinstance(schema, dict):
            return

        for prop_name, prop_schema in schema.get('properties', {}).items():
            if not isinstance(prop_schema, dict):
                continue

            if prop_name not in config:
                if 'default' in prop_schema:
                    config[prop_name] = copy.deepcopy(prop_schema['default'])
                    self.logger.debug(f"Applied default value for {prop_name}: {prop_schema['default']}")
                elif prop_schema.get('type') == 'object' and 'properties' in prop_schema:
                    config[prop_name] = {}

            self._apply_defaults(config.get(prop_name), prop_schema)
