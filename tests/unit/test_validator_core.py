"""
Tests for Validator Core Engine

Tests the ValidationEngine class, rule ordering and the validation context
for instantiate messages.
"""

import logging
import threading

import pytest

from tokenmsg.exceptions import InvalidDecimalsError, InvalidNameError, InvalidSymbolError
from validator.core import (
    ValidationEngine,
    ValidationContext,
    ValidationRule,
    ValidationResult,
    ValidationError,
    ConfigurationError,
    create_default_validator,
    validate_instantiate_quick
)
from validator.rules import DecimalsRule, NameFormatRule, SymbolFormatRule


class TestValidationContext:
    """Test ValidationContext functionality."""

    def test_context_creation(self, valid_msg):
        context = ValidationContext(msg=valid_msg)

        assert context.msg is valid_msg
        assert context.validation_errors == []
        assert context.validation_warnings == []
        assert context.rule_results == {}
        assert not context.has_errors()

    def test_first_error_wins(self):
        context = ValidationContext()

        context.add_error("rule1", "first", kind="invalid_name")
        context.add_error("rule2", "second", kind="invalid_symbol")

        assert context.error_message == "first"
        assert context.error_kind == "invalid_name"
        assert context.validation_errors == ["rule1: first", "rule2: second"]

    def test_warning_management(self):
        context = ValidationContext()

        context.add_warning("test_rule", "Test warning message")

        assert not context.has_errors()
        assert context.validation_warnings == ["test_rule: Test warning message"]

    def test_summary_generation(self, valid_msg):
        context = ValidationContext(msg=valid_msg)
        context.mark_rule_passed("rule1")
        context.add_error("rule2", "Error 2")

        summary = context.get_summary()

        assert summary["name"] == "test_token"
        assert summary["symbol"] == "TNT"
        assert summary["decimals"] == 6
        assert summary["cap"] == "1"
        assert summary["minting_policy"] == "capped"
        assert summary["rules_passed"] == 1
        assert summary["rules_total"] == 2
        assert summary["validation_result"] == "rejected"

    def test_raise_for_rejection(self, make_msg):
        context = create_default_validator().validate_instantiate(make_msg(decimals=19))

        with pytest.raises(InvalidDecimalsError):
            context.raise_for_rejection()

    def test_raise_for_rejection_without_kind(self):
        context = ValidationContext()
        context.add_error("custom", "custom failure")

        with pytest.raises(ValidationError, match="custom failure"):
            context.raise_for_rejection()

    def test_raise_for_rejection_when_approved(self, valid_msg):
        context = create_default_validator().validate_instantiate(valid_msg)

        assert context.raise_for_rejection() is None


class RecordingRule(ValidationRule):
    """Rule that records whether it ran."""

    def __init__(self, name: str, should_pass: bool = True):
        super().__init__(name, f"Recording rule {name}")
        self.should_pass = should_pass
        self.calls = 0

    def validate(self, context: ValidationContext) -> bool:
        self.calls += 1
        if not self.should_pass:
            context.add_error(self.name, "Recording rule failed")
        return self.should_pass


class TestValidationEngine:
    """Test ValidationEngine functionality."""

    def test_default_rules_in_order(self):
        engine = ValidationEngine()

        assert [rule.name for rule in engine.rules] == ["name_format", "symbol_format", "decimals"]
        assert isinstance(engine.rule_registry["name_format"], NameFormatRule)
        assert isinstance(engine.rule_registry["symbol_format"], SymbolFormatRule)
        assert isinstance(engine.rule_registry["decimals"], DecimalsRule)

    def test_default_configuration(self):
        engine = ValidationEngine()

        assert engine.get_config()["validator_id"] == "tokenmsg_validator_v1"

    def test_invalid_validator_id(self):
        with pytest.raises(ConfigurationError):
            ValidationEngine({"validator_id": ""})

    def test_invalid_log_level(self):
        with pytest.raises(ConfigurationError):
            ValidationEngine({"log_level": "LOUD"})

    def test_log_level_applied(self):
        logger = logging.getLogger("validator")
        previous = logger.level
        try:
            ValidationEngine({"log_level": "debug"})
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(previous)

    def test_approved_message(self, valid_msg):
        engine = ValidationEngine({"validator_id": "test_validator"})

        context = engine.validate_instantiate(valid_msg)

        assert not context.has_errors()
        assert context.validator_id == "test_validator"
        assert context.rule_results == {"name_format": True, "symbol_format": True, "decimals": True}
        assert context.get_summary()["validation_result"] == ValidationResult.APPROVED.value

    @pytest.mark.parametrize("overrides, error", [
        ({"name": "a"}, InvalidNameError()),
        ({"symbol": "TN"}, InvalidSymbolError()),
        ({"symbol": "TN T"}, InvalidSymbolError()),
        ({"decimals": 20}, InvalidDecimalsError()),
    ])
    def test_rejections_match_msg_validate(self, make_msg, overrides, error):
        msg = make_msg(**overrides)
        context = ValidationEngine().validate_instantiate(msg)

        assert context.error_kind == error.kind
        assert context.error_message == error.message
        with pytest.raises(type(error)):
            msg.validate()

    def test_stops_at_first_failure(self, make_msg):
        context = ValidationEngine().validate_instantiate(make_msg(name="a", symbol="TN", decimals=20))

        assert context.error_kind == "invalid_name"
        assert len(context.validation_errors) == 1
        assert context.rule_results == {"name_format": False}

    def test_symbol_warning_lists_bad_characters(self, make_msg):
        context = ValidationEngine().validate_instantiate(make_msg(symbol="T_N T"))

        assert context.error_kind == "invalid_symbol"
        assert context.validation_warnings == ["symbol_format: Disallowed characters: ' _'"]

    def test_custom_rule_runs_after_defaults(self, valid_msg):
        engine = ValidationEngine()
        rule = RecordingRule("custom", should_pass=False)
        engine.register_rule(rule)

        context = engine.validate_instantiate(valid_msg)

        assert rule.calls == 1
        assert context.error_message == "Recording rule failed"
        assert context.error_kind is None

    def test_custom_rule_skipped_after_failure(self, make_msg):
        engine = ValidationEngine()
        rule = RecordingRule("custom")
        engine.register_rule(rule)

        engine.validate_instantiate(make_msg(decimals=20))

        assert rule.calls == 0

    def test_replacing_rule_keeps_position(self, valid_msg):
        engine = ValidationEngine()
        replacement = RecordingRule("symbol_format")

        engine.register_rule(replacement)

        assert [rule.name for rule in engine.rules] == ["name_format", "symbol_format", "decimals"]
        assert engine.rules[1] is replacement

    def test_unregister_rule(self, make_msg):
        engine = ValidationEngine()

        assert engine.unregister_rule("decimals") is True
        assert engine.unregister_rule("decimals") is False

        context = engine.validate_instantiate(make_msg(decimals=20))
        assert not context.has_errors()

    def test_disabled_rule_is_skipped(self, make_msg):
        engine = ValidationEngine()
        engine.rule_registry["name_format"].enabled = False

        context = engine.validate_instantiate(make_msg(name="a"))

        assert not context.has_errors()
        assert "name_format" not in context.rule_results

    def test_result_codes(self):
        assert [result.value for result in ValidationResult] == ["approved", "rejected"]

    def test_statistics(self, valid_msg, make_msg):
        engine = ValidationEngine()

        engine.validate_instantiate(valid_msg)
        engine.validate_instantiate(make_msg(symbol="TN"))
        engine.process_validation_request({})

        stats = engine.get_statistics()
        assert stats["total_validations"] == 3
        assert stats["approved_validations"] == 1
        assert stats["rejected_validations"] == 1
        assert stats["error_validations"] == 1
        assert stats["rule_order"] == ["name_format", "symbol_format", "decimals"]

    def test_concurrent_validation(self, valid_msg, make_msg):
        engine = ValidationEngine()
        invalid = make_msg(decimals=19)

        def worker():
            for _ in range(50):
                engine.validate_instantiate(valid_msg)
                engine.validate_instantiate(invalid)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        stats = engine.get_statistics()
        assert stats["total_validations"] == 400
        assert stats["approved_validations"] == 200
        assert stats["rejected_validations"] == 200


class TestValidationRequests:
    """Test raw request processing."""

    def test_success_response(self, valid_msg_data):
        engine = ValidationEngine({"validator_id": "req_validator"})

        response = engine.process_validation_request({"msg": valid_msg_data})

        assert response["status"] == "success"
        assert response["validator_id"] == "req_validator"
        assert response["validation_result"]["validation_result"] == "approved"

    def test_rejected_message_is_still_success_status(self, valid_msg_data):
        valid_msg_data["decimals"] = 20

        response = ValidationEngine().process_validation_request({"msg": valid_msg_data})

        assert response["status"] == "success"
        assert response["validation_result"]["error"] == "Decimals must not exceed 18"

    def test_missing_message(self):
        response = ValidationEngine().process_validation_request({"message": {}})

        assert response["status"] == "error"
        assert "No instantiate message" in response["error"]

    def test_undecodable_message(self, valid_msg_data):
        valid_msg_data["decimals"] = 300

        response = ValidationEngine().process_validation_request({"msg": valid_msg_data})

        assert response["status"] == "error"
        assert "Invalid instantiate message" in response["error"]


class TestUtilityFunctions:

    def test_create_default_validator(self):
        engine = create_default_validator({"validator_id": "custom"})

        assert engine.config["validator_id"] == "custom"

    def test_quick_validation_with_dict(self, valid_msg_data):
        assert validate_instantiate_quick(valid_msg_data) is True

    def test_quick_validation_rejects(self, make_msg):
        assert validate_instantiate_quick(make_msg(name="ab")) is False
