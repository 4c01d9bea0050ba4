"""
Instantiation Validator Core Engine

This module provides the ValidationEngine class that runs the instantiation
checks for fungible-token messages as an ordered list of rules.

The ValidationEngine acts as the central coordinator for:
- Token name length enforcement
- Ticker symbol format enforcement
- Decimal precision bounds
- Supply cap extraction for minting bookkeeping

Rules run in registration order and the engine stops at the first failure, so
a context never carries more than one rejection.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from threading import Lock
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as DecodeError

from tokenmsg.exceptions import InstantiateError, error_for_kind
from tokenmsg.schema import InstantiateMsg


class ValidationResult(Enum):
    """Validation result codes."""
    APPROVED = "approved"
    REJECTED = "rejected"


class ValidationError(Exception):
    """Base exception for validation engine errors."""
    pass


class ConfigurationError(ValidationError):
    """Raised when validator configuration is invalid."""
    pass


@dataclass
class ValidationContext:
    """
    Context object passed between validation rules.

    Holds the decoded message and collects the outcome of each rule.
    """
    msg: Optional[InstantiateMsg] = None

    # Validation state
    validation_errors: List[str] = field(default_factory=list)
    validation_warnings: List[str] = field(default_factory=list)
    rule_results: Dict[str, bool] = field(default_factory=dict)
    error_kind: Optional[str] = None
    error_message: Optional[str] = None

    # Metadata
    timestamp: Optional[int] = None
    validator_id: Optional[str] = None

    def add_error(self, rule_name: str, message: str, kind: Optional[str] = None):
        """Add a validation error. The first error recorded wins."""
        self.validation_errors.append(f"{rule_name}: {message}")
        self.rule_results[rule_name] = False
        if self.error_message is None:
            self.error_message = message
            self.error_kind = kind

    def add_warning(self, rule_name: str, message: str):
        """Add a validation warning."""
        self.validation_warnings.append(f"{rule_name}: {message}")

    def mark_rule_passed(self, rule_name: str):
        """Mark a validation rule as passed."""
        self.rule_results[rule_name] = True

    def has_errors(self) -> bool:
        """Check if validation has errors."""
        return len(self.validation_errors) > 0

    def raise_for_rejection(self):
        """Re-raise the recorded rejection as its InstantiateError."""
        if self.error_kind is not None:
            raise error_for_kind(self.error_kind, self.error_message)
        if self.has_errors():
            raise ValidationError(self.error_message)

    def get_summary(self) -> Dict[str, Any]:
        """Get validation summary."""
        msg = self.msg
        return {
            "name": msg.name if msg else None,
            "symbol": msg.symbol if msg else None,
            "decimals": msg.decimals if msg else None,
            "cap": str(msg.get_cap()) if msg and msg.get_cap() is not None else None,
            "minting_policy": msg.minting_policy().value if msg else None,
            "error": self.error_message,
            "error_kind": self.error_kind,
            "errors": self.validation_errors,
            "warnings": self.validation_warnings,
            "rules_passed": sum(1 for passed in self.rule_results.values() if passed),
            "rules_total": len(self.rule_results),
            "validation_result": ValidationResult.APPROVED.value if not self.has_errors() else ValidationResult.REJECTED.value
        }


class ValidationRule(ABC):
    """
    Abstract base class for validation rules.

    Each rule checks one field of the instantiation message.
    """

    def __init__(self, name: str, description: str, enabled: bool = True):
        self.name = name
        self.description = description
        self.enabled = enabled
        self.logger = logging.getLogger(f"validator.rules.{name}")

    @abstractmethod
    def validate(self, context: ValidationContext) -> bool:
        """
        Validate the message held by the context.

        Args:
            context: Validation context containing the decoded message

        Returns:
            True if validation passes, False otherwise
        """
        pass

    def is_applicable(self, context: ValidationContext) -> bool:
        """
        Check if this rule applies to the given context.

        Args:
            context: Validation context

        Returns:
            True if this rule should be applied
        """
        return self.enabled and context.msg is not None

    def reject(self, context: ValidationContext, error: InstantiateError) -> bool:
        """Record ``error`` against this rule and report failure."""
        context.add_error(self.name, error.message, kind=error.kind)
        self.logger.debug(f"Rule {self.name} rejected message: {error.message}")
        return False


class ValidationEngine:
    """
    Main validation engine for instantiation messages.

    Runs the registered rules in order, stopping at the first failure, and
    keeps counters of approved and rejected messages.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the validation engine.

        Args:
            config: Configuration dictionary for the validator
        """
        self.config = dict(config or {})
        self.logger = logging.getLogger("validator.engine")

        # Validation rules
        self.rules: List[ValidationRule] = []
        self.rule_registry: Dict[str, ValidationRule] = {}

        # Statistics
        self._stats_lock = Lock()
        self.validation_stats = {
            "total_validations": 0,
            "approved_validations": 0,
            "rejected_validations": 0,
            "error_validations": 0
        }

        self._load_configuration()
        self._register_default_rules()

    def _load_configuration(self):
        """Load validator configuration."""
        self.logger.debug("Loading validator configuration")

        defaults = {
            "validator_id": "tokenmsg_validator_v1",
            "log_level": None,
        }

        for key, value in defaults.items():
            if key not in self.config:
                self.config[key] = value

        if not isinstance(self.config["validator_id"], str) or not self.config["validator_id"]:
            raise ConfigurationError("validator_id must be a non-empty string")

        log_level = self.config["log_level"]
        if log_level:
            level = logging.getLevelName(str(log_level).upper())
            if not isinstance(level, int):
                raise ConfigurationError(f"Unknown log level: {log_level}")
            logging.getLogger("validator").setLevel(level)

    def _register_default_rules(self):
        """Register default validation rules in their fixed order."""
        # Import here to avoid circular imports
        from .rules.name_format import NameFormatRule
        from .rules.symbol_format import SymbolFormatRule
        from .rules.decimals import DecimalsRule

        self.register_rule(NameFormatRule())
        self.register_rule(SymbolFormatRule())
        self.register_rule(DecimalsRule())

    def register_rule(self, rule: ValidationRule):
        """
        Register a validation rule. Rules run in registration order.

        Args:
            rule: Validation rule to register
        """
        if rule.name in self.rule_registry:
            self.logger.warning(f"Rule {rule.name} already registered, replacing")
            self.rules[self.rules.index(self.rule_registry[rule.name])] = rule
        else:
            self.rules.append(rule)

        self.rule_registry[rule.name] = rule
        self.logger.debug(f"Registered validation rule: {rule.name}")

    def unregister_rule(self, rule_name: str) -> bool:
        """
        Unregister a validation rule.

        Args:
            rule_name: Name of the rule to unregister

        Returns:
            True if rule was found and removed
        """
        if rule_name in self.rule_registry:
            rule = self.rule_registry[rule_name]
            self.rules.remove(rule)
            del self.rule_registry[rule_name]
            self.logger.info(f"Unregistered validation rule: {rule_name}")
            return True

        return False

    def validate_instantiate(self, msg: InstantiateMsg) -> ValidationContext:
        """
        Validate an instantiation message.

        Args:
            msg: Decoded instantiation message

        Returns:
            ValidationContext containing validation results
        """
        self.logger.debug(f"Validating instantiate message for {msg.symbol!r}")

        context = ValidationContext(
            msg=msg,
            timestamp=int(time.time()),
            validator_id=self.config["validator_id"]
        )
        self._apply_validation_rules(context)

        if context.has_errors():
            self._bump("rejected_validations")
            self.logger.info(f"Instantiate message rejected: {context.error_message}")
        else:
            self._bump("approved_validations")
            self.logger.info("Instantiate message approved")

        return context

    def process_validation_request(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """
        Process a validation request from external systems.

        Args:
            request: Request holding the raw message under ``"msg"``

        Returns:
            Validation response with results
        """
        self.logger.debug("Processing validation request")

        raw_msg = request.get("msg")
        if not isinstance(raw_msg, dict):
            return self._error_response("No instantiate message provided in request")

        try:
            msg = InstantiateMsg.model_validate(raw_msg)
        except DecodeError as e:
            self.logger.warning(f"Failed to decode instantiate message: {e.error_count()} errors")
            return self._error_response(f"Invalid instantiate message: {e}")

        context = self.validate_instantiate(msg)
        return {
            "status": "success",
            "validation_result": context.get_summary(),
            "timestamp": context.timestamp,
            "validator_id": self.config["validator_id"]
        }

    def _error_response(self, message: str) -> Dict[str, Any]:
        self._bump("error_validations", count_total=True)
        return {
            "status": "error",
            "error": message,
            "validator_id": self.config["validator_id"]
        }

    def _apply_validation_rules(self, context: ValidationContext):
        """Apply rules in order until one fails."""
        self._bump("total_validations")

        for rule in self.rules:
            if not rule.is_applicable(context):
                self.logger.debug(f"Skipping rule {rule.name} - not applicable")
                continue

            if rule.validate(context):
                context.mark_rule_passed(rule.name)
                self.logger.debug(f"Rule {rule.name} passed")
            else:
                self.logger.debug(f"Rule {rule.name} failed, stopping")
                break

    def _bump(self, counter: str, count_total: bool = False):
        with self._stats_lock:
            self.validation_stats[counter] += 1
            if count_total:
                self.validation_stats["total_validations"] += 1

    def get_statistics(self) -> Dict[str, Any]:
        """Get validation statistics."""
        with self._stats_lock:
            stats = dict(self.validation_stats)
        return {
            **stats,
            "registered_rules": len(self.rules),
            "rule_order": [rule.name for rule in self.rules]
        }

    def get_config(self) -> Dict[str, Any]:
        """Get current configuration."""
        return dict(self.config)


# Utility functions for validation

def create_default_validator(config: Optional[Dict[str, Any]] = None) -> ValidationEngine:
    """
    Create a ValidationEngine with default configuration.

    Args:
        config: Optional configuration overrides

    Returns:
        Configured ValidationEngine instance
    """
    default_config = {
        "validator_id": "tokenmsg_default_validator",
    }

    if config:
        default_config.update(config)

    return ValidationEngine(default_config)


def validate_instantiate_quick(msg: Union[InstantiateMsg, Dict[str, Any]],
                               config: Optional[Dict[str, Any]] = None) -> bool:
    """
    Quick validation for simple use cases.

    Args:
        msg: Decoded message or its raw dictionary form
        config: Optional validator configuration

    Returns:
        True if validation passes
    """
    if not isinstance(msg, InstantiateMsg):
        msg = InstantiateMsg.model_validate(msg)

    validator = create_default_validator(config)
    context = validator.validate_instantiate(msg)
    return not context.has_errors()
