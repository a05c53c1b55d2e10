"""Tests for CGST / SGST / IGST computation and the inclusive-tax backfill."""

from decimal import Decimal

import pytest

from gst_invoice.domain.models.gst import GstClassification
from gst_invoice.domain.services.gst_calculator import (
    DEFAULT_GST_RATE,
    GST_RATES,
    component_rates,
    compute_tax,
    gst_from_inclusive_total,
    is_standard_rate,
)

TAXABLES = [0, 1, Decimal("99.99"), 1000, Decimal("123456.78"), 2500.5]
RATES = list(GST_RATES) + [0]
TOLERANCE = Decimal("1e-9")


class TestComputeTax:

    def test_intrastate_scenario(self):
        result = compute_tax(1000, GstClassification.INTRASTATE, 18)
        assert result.cgst == 90
        assert result.sgst == 90
        assert result.igst == 0
        assert result.tax_amount == 180
        assert result.grand_total == 1180

    def test_interstate_scenario(self):
        result = compute_tax(1000, GstClassification.INTERSTATE, 18)
        assert result.cgst == 0
        assert result.sgst == 0
        assert result.igst == 180
        assert result.grand_total == 1180

    def test_default_rate_is_18(self):
        assert DEFAULT_GST_RATE == 18
        assert compute_tax(1000, "intrastate").tax_amount == 180

    def test_short_aliases_accepted(self):
        assert compute_tax(100, "intra", 5).cgst == Decimal("2.5")
        assert compute_tax(100, "inter", 28).igst == 28

    def test_unused_components_are_zero_not_none(self):
        result = compute_tax(500, GstClassification.INTERSTATE, 12)
        assert result.cgst is not None and result.cgst == 0
        assert result.sgst is not None and result.sgst == 0

    @pytest.mark.parametrize("taxable", TAXABLES)
    @pytest.mark.parametrize("rate", RATES)
    def test_intrastate_halves_are_equal(self, taxable, rate):
        result = compute_tax(taxable, GstClassification.INTRASTATE, rate)
        expected = Decimal(str(taxable)) * Decimal(rate) / 100
        assert result.cgst == result.sgst
        assert abs(2 * result.cgst + 0 * result.igst - expected) <= TOLERANCE

    @pytest.mark.parametrize("taxable", TAXABLES)
    @pytest.mark.parametrize("rate", RATES)
    @pytest.mark.parametrize("kind", list(GstClassification))
    def test_totals_are_consistent(self, taxable, rate, kind):
        result = compute_tax(taxable, kind, rate)
        assert result.tax_amount == result.cgst + result.sgst + result.igst
        assert result.grand_total == Decimal(str(taxable)) + result.tax_amount

    @pytest.mark.parametrize("rate", GST_RATES)
    def test_only_one_head_is_charged(self, rate):
        intra = compute_tax(1000, GstClassification.INTRASTATE, rate)
        inter = compute_tax(1000, GstClassification.INTERSTATE, rate)
        assert intra.igst == 0 and intra.cgst > 0 and intra.sgst > 0
        assert inter.igst > 0 and inter.cgst == 0 and inter.sgst == 0

    def test_negative_base_passes_through(self):
        result = compute_tax(-100, GstClassification.INTERSTATE, 18)
        assert result.igst == -18
        assert result.grand_total == -118

    def test_non_finite_base_is_not_rejected(self):
        result = compute_tax(float("nan"), GstClassification.INTERSTATE, 18)
        assert result.igst.is_nan()
        assert result.grand_total.is_nan()

    def test_deterministic(self):
        a = compute_tax(Decimal("4567.89"), "intra", 12)
        b = compute_tax(Decimal("4567.89"), "intra", 12)
        assert a == b

    def test_unknown_classification(self):
        with pytest.raises(ValueError):
            compute_tax(100, "export", 18)


class TestInclusiveBackfill:

    def test_extracts_tax_from_total(self):
        assert gst_from_inclusive_total(1180, 18) == 180
        assert gst_from_inclusive_total(1050, 5) == 50

    def test_default_rate(self):
        assert gst_from_inclusive_total(1180) == 180

    @pytest.mark.parametrize("total", [0, -50, Decimal("-0.01")])
    def test_non_positive_total_is_zero(self, total):
        assert gst_from_inclusive_total(total, 18) == 0

    @pytest.mark.parametrize("taxable", TAXABLES)
    @pytest.mark.parametrize("rate", GST_RATES)
    def test_round_trip_recovers_tax(self, taxable, rate):
        result = compute_tax(taxable, GstClassification.INTERSTATE, rate)
        recovered = gst_from_inclusive_total(result.grand_total, rate)
        assert abs(recovered - result.tax_amount) <= TOLERANCE


class TestComponentRates:

    def test_intrastate_split(self):
        rates = component_rates("intra", 18)
        assert rates.cgst_rate == 9
        assert rates.sgst_rate == 9
        assert rates.igst_rate == 0

    def test_interstate_single_head(self):
        rates = component_rates(GstClassification.INTERSTATE, 28)
        assert (rates.cgst_rate, rates.sgst_rate, rates.igst_rate) == (0, 0, 28)

    def test_default_rate(self):
        assert component_rates("inter").igst_rate == 18


class TestRateSchedule:

    @pytest.mark.parametrize("rate", [5, 12, 18, 28, 18.0, "12"])
    def test_standard(self, rate):
        assert is_standard_rate(rate)

    @pytest.mark.parametrize("rate", [0, 3, 15, "abc"])
    def test_non_standard(self, rate):
        assert not is_standard_rate(rate)


class TestClassificationParse:

    @pytest.mark.parametrize("raw", ["intra", "INTRASTATE", " intrastate "])
    def test_intrastate(self, raw):
        assert GstClassification.parse(raw) is GstClassification.INTRASTATE

    def test_enum_passthrough(self):
        assert GstClassification.parse(GstClassification.INTERSTATE) is GstClassification.INTERSTATE

    def test_unknown(self):
        with pytest.raises(ValueError):
            GstClassification.parse("sez")
