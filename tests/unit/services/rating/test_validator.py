"""Unit tests for quote request validation."""

from collections.abc import Callable

import pytest

from policy_pricing.models.errors import ErrorKind, ValidationError
from policy_pricing.models.quote import QuoteRequest
from policy_pricing.services.rating.validator import QuoteValidator


class TestQuoteValidator:
    """Test field rules and fail-fast ordering."""

    @pytest.mark.parametrize("policy_type", ["auto", "home", "life"])
    def test_supported_policy_types_accepted(
        self, make_request: Callable[..., QuoteRequest], policy_type: str
    ) -> None:
        """Every supported policy type passes."""
        request = make_request(policy_type=policy_type)

        result = QuoteValidator().validate(request)

        assert result.is_ok()
        assert result.unwrap() is request

    def test_unsupported_policy_type_rejected(
        self, make_request: Callable[..., QuoteRequest]
    ) -> None:
        """Unknown policy types name the accepted ones."""
        result = QuoteValidator().validate(make_request(policy_type="boat"))

        assert result.is_err()
        error = result.unwrap_err()
        assert isinstance(error, ValidationError)
        assert error.kind is ErrorKind.VALIDATION
        assert error.field == "policy_type"
        assert error.value == "boat"
        assert "auto, home, life" in error.message

    @pytest.mark.parametrize("coverage_amount", [0, -1, -250000])
    def test_non_positive_coverage_rejected(
        self, make_request: Callable[..., QuoteRequest], coverage_amount: int
    ) -> None:
        """Coverage must be greater than zero."""
        result = QuoteValidator().validate(make_request(coverage_amount=coverage_amount))

        assert result.unwrap_err().field == "coverage_amount"

    @pytest.mark.parametrize("age", [18, 19, 64, 119, 120])
    def test_age_boundaries_accepted(
        self, make_request: Callable[..., QuoteRequest], age: int
    ) -> None:
        """Ages 18 through 120 inclusive are accepted."""
        assert QuoteValidator().validate(make_request(customer_age=age)).is_ok()

    @pytest.mark.parametrize("age", [0, 17, 121, 150])
    def test_age_outside_range_rejected(
        self, make_request: Callable[..., QuoteRequest], age: int
    ) -> None:
        """Ages outside [18, 120] are rejected."""
        error = QuoteValidator().validate(make_request(customer_age=age)).unwrap_err()

        assert error.field == "customer_age"
        assert error.message == "customer age must be between 18 and 120"

    @pytest.mark.parametrize("risk_score", [1, 3, 5])
    def test_risk_scores_accepted(
        self, make_request: Callable[..., QuoteRequest], risk_score: int
    ) -> None:
        """Risk scores 1 through 5 are accepted."""
        assert QuoteValidator().validate(make_request(risk_score=risk_score)).is_ok()

    @pytest.mark.parametrize("risk_score", [0, 6, -2])
    def test_risk_score_outside_range_rejected(
        self, make_request: Callable[..., QuoteRequest], risk_score: int
    ) -> None:
        """Risk scores outside [1, 5] are rejected."""
        error = QuoteValidator().validate(make_request(risk_score=risk_score)).unwrap_err()

        assert error.field == "risk_score"

    def test_first_violation_reported(
        self, make_request: Callable[..., QuoteRequest]
    ) -> None:
        """Only the first violated rule is reported."""
        request = make_request(
            policy_type="boat", coverage_amount=0, customer_age=10, risk_score=9
        )

        assert QuoteValidator().validate(request).unwrap_err().field == "policy_type"

        request = make_request(coverage_amount=0, customer_age=10, risk_score=9)
        assert QuoteValidator().validate(request).unwrap_err().field == "coverage_amount"

    def test_custom_policy_types(self, make_request: Callable[..., QuoteRequest]) -> None:
        """Supported policy types can be narrowed."""
        validator = QuoteValidator(supported_policy_types=["auto"])

        assert validator.supported_policy_types == ("auto",)
        assert validator.validate(make_request(policy_type="home")).is_err()
