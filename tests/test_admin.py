"""
Tests for permission checks, the refresh action and panel field definitions.
"""
from datetime import date

import pytest
from itsdangerous import URLSafeTimedSerializer

from store_metrics.admin.actions import (
    MONTH_FIELD,
    NONCE_FIELD,
    NOTICE_FIELD,
    REFRESH_NOTICE,
    YEAR_FIELD,
    handle_refresh_stats,
    refresh_form,
    selected_period,
)
from store_metrics.admin.fields import (
    RenderState,
    budget_field,
    cost_price_field,
    month_label,
    year_options,
)
from store_metrics.admin.security import NONCE_SALT, NonceSigner, require_capability
from store_metrics.config.settings import COST_PRICE_META_KEY, REFRESH_ACTION
from store_metrics.exceptions import NonceVerificationError, PermissionDeniedError
from store_metrics.stores.monthly_budget import BudgetCategory

TODAY = date(2025, 3, 14)


@pytest.fixture
def signer():
    return NonceSigner(secret_key="test-secret", max_age=3600)


class TestRequireCapability:
    def test_allowed(self):
        require_capability(["read", "manage_woocommerce"])

    def test_denied(self):
        with pytest.raises(PermissionDeniedError) as exc_info:
            require_capability(["read"])
        assert exc_info.value.capability == "manage_woocommerce"
        assert exc_info.value.message == "You do not have sufficient permissions to access this page."

    def test_empty(self):
        with pytest.raises(PermissionDeniedError):
            require_capability([])
        with pytest.raises(PermissionDeniedError):
            require_capability(None)

    def test_custom_capability(self):
        require_capability({"view_reports"}, capability="view_reports")


class TestNonceSigner:
    def test_round_trip(self, signer):
        signer.verify(signer.create(REFRESH_ACTION), REFRESH_ACTION)

    def test_missing(self, signer):
        with pytest.raises(NonceVerificationError, match="missing"):
            signer.verify("", REFRESH_ACTION)
        with pytest.raises(NonceVerificationError):
            signer.verify(None, REFRESH_ACTION)

    def test_other_action(self, signer):
        with pytest.raises(NonceVerificationError, match="action mismatch"):
            signer.verify(signer.create("other_action"), REFRESH_ACTION)

    def test_tampered(self, signer):
        token = signer.create(REFRESH_ACTION)
        with pytest.raises(NonceVerificationError, match="bad signature"):
            signer.verify(token[:-2] + "xx", REFRESH_ACTION)

    def test_other_secret(self, signer):
        token = NonceSigner(secret_key="another-secret").create(REFRESH_ACTION)
        with pytest.raises(NonceVerificationError):
            signer.verify(token, REFRESH_ACTION)

    def test_expired(self):
        signer = NonceSigner(secret_key="test-secret", max_age=-1)
        with pytest.raises(NonceVerificationError, match="expired"):
            signer.verify(signer.create(REFRESH_ACTION), REFRESH_ACTION)

    def test_non_dict_payload(self, signer):
        token = URLSafeTimedSerializer("test-secret", salt=NONCE_SALT).dumps("plain")
        with pytest.raises(NonceVerificationError, match="action mismatch"):
            signer.verify(token, REFRESH_ACTION)

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            NonceSigner(secret_key="")


class TestSelectedPeriod:
    def test_from_params(self):
        assert selected_period({YEAR_FIELD: "2023", MONTH_FIELD: "11"}, TODAY) == (2023, 11)

    def test_defaults_to_today(self):
        assert selected_period({}, TODAY) == (2025, 3)

    def test_garbage_falls_back(self):
        assert selected_period({YEAR_FIELD: "abc", MONTH_FIELD: ""}, TODAY) == (2025, 3)


class TestRefreshAction:
    def test_redirect(self, signer):
        form = refresh_form(signer, 2024, 7)
        assert form[YEAR_FIELD] == "2024"
        assert form[MONTH_FIELD] == "7"

        redirect = handle_refresh_stats(form, signer, TODAY)

        assert redirect == {
            NOTICE_FIELD: REFRESH_NOTICE,
            YEAR_FIELD: "2024",
            MONTH_FIELD: "7",
        }
        assert REFRESH_NOTICE == "Statistics refreshed successfully!"

    def test_missing_period_uses_today(self, signer):
        form = {NONCE_FIELD: signer.create(REFRESH_ACTION)}
        redirect = handle_refresh_stats(form, signer, TODAY)
        assert (redirect[YEAR_FIELD], redirect[MONTH_FIELD]) == ("2025", "3")

    def test_bad_nonce_stops(self, signer):
        form = refresh_form(signer, 2024, 7)
        form[NONCE_FIELD] = "forged"
        with pytest.raises(NonceVerificationError):
            handle_refresh_stats(form, signer, TODAY)

    def test_missing_nonce_stops(self, signer):
        with pytest.raises(NonceVerificationError):
            handle_refresh_stats({YEAR_FIELD: "2024", MONTH_FIELD: "7"}, signer, TODAY)


class TestFields:
    def test_cost_price_field_added_once_per_render(self, cost_prices):
        cost_prices.set(101, "9.5")
        state = RenderState()

        first = cost_price_field(state, 101, cost_prices)
        second = cost_price_field(state, 101, cost_prices)

        assert first["id"] == COST_PRICE_META_KEY
        assert first["value"] == 9.5
        assert first["min_value"] == 0.0
        assert second is None

    def test_new_render_state_allows_field_again(self, cost_prices):
        cost_price_field(RenderState(), 1, cost_prices)
        assert cost_price_field(RenderState(), 1, cost_prices) is not None

    def test_claim(self):
        state = RenderState()
        assert state.claim("a")
        assert not state.claim("a")
        assert state.claim("b")

    def test_budget_field(self, budgets):
        budgets.set_bulk(BudgetCategory.PR_BUDGET, {"2024-07": 120})
        spec = budget_field(BudgetCategory.PR_BUDGET, 2024, 7, budgets)
        assert spec["key"] == "2024-07"
        assert spec["id"] == "store_metrics_new_pr_budget_monthly[2024-07]"
        assert spec["value"] == 120.0

    def test_budget_field_empty_month(self, budgets):
        spec = budget_field("additional_costs", 2024, 8, budgets)
        assert spec["value"] == 0.0
        assert spec["id"] == "store_metrics_new_additional_costs_monthly[2024-08]"

    def test_year_options(self):
        assert year_options(TODAY) == [2020, 2021, 2022, 2023, 2024, 2025]

    def test_year_options_include_selected_year_in_order(self):
        assert year_options(TODAY, selected=2012) == [2012, 2020, 2021, 2022, 2023, 2024, 2025]
        assert year_options(TODAY, selected=2030)[-1] == 2030
        assert year_options(TODAY, selected=2023) == [2020, 2021, 2022, 2023, 2024, 2025]

    def test_month_label(self):
        assert month_label(1) == "Ocak"
        assert month_label(12) == "Aralık"
        assert month_label(13) == "13"
