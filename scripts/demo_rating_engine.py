#!/usr/bin/env python3
"""Demo script pricing a few quotes against the packaged pricing rules.

This script demonstrates:
1. Premium calculation with the full factor breakdown
2. Discount stacking logic
3. Dynamic pricing toggled by FEATURE_DYNAMIC_RATES
4. Request validation errors
5. The rate table view
"""

import sys
import time
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from policy_pricing.core.config import get_settings
from policy_pricing.core.logging_utils import configure_logging, level_from_name
from policy_pricing.models.quote import QuoteRequest
from policy_pricing.services.rating import RatingEngine

SCENARIOS: list[tuple[str, QuoteRequest]] = [
    (
        "Loyal multi-policy auto customer",
        QuoteRequest(
            policy_type="auto",
            coverage_amount=500000,
            customer_age=35,
            risk_score=2,
            multi_policy=True,
            loyalty_years=5,
            paperless_bill=True,
        ),
    ),
    (
        "Young home owner",
        QuoteRequest(
            policy_type="home",
            coverage_amount=650000,
            customer_age=22,
            risk_score=1,
            claims_history=1,
        ),
    ),
    (
        "Senior life policy with claims",
        QuoteRequest(
            policy_type="life",
            coverage_amount=750000,
            customer_age=68,
            risk_score=4,
            claims_history=4,
        ),
    ),
    (
        "Underage applicant",
        QuoteRequest(
            policy_type="auto",
            coverage_amount=250000,
            customer_age=16,
            risk_score=3,
        ),
    ),
]


def demo_rating_scenarios() -> None:
    """Run various rating scenarios to demonstrate capabilities."""
    settings = get_settings()
    configure_logging(level=level_from_name(settings.log_level))
    engine = RatingEngine.from_settings(settings)
    active = engine.rate_tables.active

    print("🚀 Policy Pricing Engine Demo")
    print("=" * 60)
    print(f"Rules: {engine.rate_tables.source} (version {active.version})")
    print(f"Dynamic pricing: {'on' if active.dynamic_pricing.enabled else 'off'}")
    print()

    for index, (title, request) in enumerate(SCENARIOS, start=1):
        print(f"📊 Scenario {index}: {title}")
        print("-" * 40)

        start_time = time.perf_counter()
        result = engine.calculate_quote(request)
        calc_time = (time.perf_counter() - start_time) * 1000

        if result.is_err():
            print(f"❌ Error: {result.unwrap_err()}")
            print()
            continue

        quote = result.unwrap()
        print(f"✅ Quote: {quote.quote_id} (valid until {quote.valid_until:%Y-%m-%d})")
        print(f"✅ Base Premium: ${quote.base_premium:,.2f}")
        print(f"✅ Adjusted Rate: ${quote.adjusted_rate:,.2f}")
        for discount in quote.applied_discounts:
            print(
                f"   - {discount.discount_type.value:18} "
                f"{discount.rate:.0%}  -${discount.amount:,.2f}"
            )
        print(f"✅ Discounts: ${quote.discount_amount:,.2f}")
        print(f"✅ Final Premium: ${quote.final_premium:,.2f}")

        factors = quote.factors
        print(
            f"   Factors: base {factors.base_multiplier} x coverage "
            f"{factors.coverage_multiplier} x age {factors.age_multiplier} x risk "
            f"{factors.risk_multiplier} x dynamic {factors.dynamic_multiplier}"
        )
        print(f"⏱️  Calculation Time: {calc_time:.2f}ms")
        print()

    print("📋 Rate Tables")
    print("=" * 60)
    snapshot = engine.get_rates()
    for rate in snapshot.rates:
        tiers = ", ".join(f"{amount}: {value}" for amount, value in rate.coverage.items())
        print(f"{rate.policy_type:6} base ${rate.base_rate:>8,.2f}  [{tiers}]")

    print("\n✨ Demo Complete!")


if __name__ == "__main__":
    demo_rating_scenarios()
