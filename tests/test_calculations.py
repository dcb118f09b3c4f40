#!/usr/bin/env python3
"""Tests for cost calculation functions."""
import pytest
from maintenance import (
    CostBreakdown,
    MaintenanceType,
    RateTable,
    Vehicle,
    VehicleSelection,
    calc_crew_count,
    calc_maintenance_fees,
    calc_transportation,
    calc_work_days,
    calculate_costs,
)

OFFLINE = MaintenanceType.OFFLINE
FLS = MaintenanceType.FLS
CALIBRATION = MaintenanceType.CALIBRATION
FLS_CALIBRATION = MaintenanceType.FLS_CALIBRATION


def make_selection(n, location="Addis Ababa", types=()):
    return VehicleSelection(Vehicle(f"v{n}", f"AA-{n}", location), types)


class TestCalcMaintenanceFees:
    """Tests for calc_maintenance_fees."""

    def test_prices_per_type(self):
        """Each type has its fixed price."""
        assert calc_maintenance_fees([make_selection(1, types=[OFFLINE])]) == 600
        assert calc_maintenance_fees([make_selection(1, types=[FLS])]) == 800
        assert calc_maintenance_fees([make_selection(1, types=[CALIBRATION])]) == 1200
        assert calc_maintenance_fees([make_selection(1, types=[FLS_CALIBRATION])]) == 1400

    def test_multiple_types_are_summed(self):
        """A vehicle with several types pays for each, not the max."""
        selection = make_selection(1, types=[OFFLINE, FLS, CALIBRATION])
        assert calc_maintenance_fees([selection]) == 2600

    def test_sums_across_vehicles(self):
        selections = [
            make_selection(1, types=[OFFLINE]),
            make_selection(2, types=[FLS_CALIBRATION]),
        ]
        assert calc_maintenance_fees(selections) == 2000

    def test_empty(self):
        assert calc_maintenance_fees([]) == 0


class TestCalcWorkDays:
    """Tests for calc_work_days."""

    @pytest.mark.parametrize("count", [1, 2, 3])
    def test_up_to_three_vehicles_is_one_day(self, count):
        assert calc_work_days(count) == 1

    @pytest.mark.parametrize("count", [4, 5, 6])
    def test_four_to_six_vehicles_is_two_days(self, count):
        assert calc_work_days(count) == 2

    def test_always_rounds_up(self):
        """Partial days round up, never to nearest."""
        assert calc_work_days(7) == 3
        assert calc_work_days(10) == 4

    def test_zero_vehicles(self):
        assert calc_work_days(0) == 0

    def test_custom_divisor(self):
        assert calc_work_days(5, divisor=2) == 3


class TestCalcCrewCount:
    """Tests for calc_crew_count."""

    def test_offline_only_is_one(self):
        selections = [
            make_selection(1, types=[OFFLINE]),
            make_selection(2, types=[OFFLINE]),
        ]
        assert calc_crew_count(selections) == 1

    @pytest.mark.parametrize("field_type", [FLS, CALIBRATION, FLS_CALIBRATION])
    def test_any_field_service_is_two(self, field_type):
        selections = [
            make_selection(1, types=[OFFLINE]),
            make_selection(2, types=[field_type]),
        ]
        assert calc_crew_count(selections) == 2

    def test_offline_combined_with_fls_on_one_vehicle(self):
        assert calc_crew_count([make_selection(1, types=[OFFLINE, FLS])]) == 2

    def test_vehicle_without_types_is_ignored(self):
        """An empty selection does not break the offline-only classification."""
        selections = [
            make_selection(1, types=[OFFLINE]),
            make_selection(2, types=[]),
        ]
        assert calc_crew_count(selections) == 1

    def test_nothing_selected(self):
        assert calc_crew_count([make_selection(1)]) == 0


class TestCalcTransportation:
    """Tests for calc_transportation."""

    def test_addis_ababa_is_free(self):
        assert calc_transportation([make_selection(1, "Addis Ababa", [OFFLINE])]) == 0

    def test_named_city_rate(self):
        assert calc_transportation([make_selection(1, "Mekelle", [OFFLINE])]) == 2500

    def test_unknown_location_is_free(self):
        assert calc_transportation([make_selection(1, "Atlantis", [OFFLINE])]) == 0

    def test_same_location_charged_once(self):
        """Two vehicles in one city cost the same as one vehicle there."""
        one = [make_selection(1, "Dire Dawa", [OFFLINE])]
        two = one + [make_selection(2, "Dire Dawa", [FLS])]
        assert calc_transportation(one) == calc_transportation(two) == 2000

    def test_distinct_locations_are_summed(self):
        selections = [
            make_selection(1, "Dire Dawa", [OFFLINE]),
            make_selection(2, "Hawassa", [OFFLINE]),
        ]
        assert calc_transportation(selections) == 3500

    def test_location_without_maintenance_is_not_charged(self):
        selections = [
            make_selection(1, "Addis Ababa", [OFFLINE]),
            make_selection(2, "Gondar", []),
        ]
        assert calc_transportation(selections) == 0


class TestCalculateCosts:
    """Tests for calculate_costs, including the reference scenarios."""

    def test_empty_selection_is_zero(self):
        assert calculate_costs([]) == CostBreakdown()
        assert calculate_costs([]).total == 0

    def test_no_types_selected_is_zero(self):
        selections = [make_selection(1, "Dire Dawa"), make_selection(2, "Hawassa")]
        breakdown = calculate_costs(selections)
        assert breakdown == CostBreakdown(0, 0, 0, 0, 0)
        assert breakdown.total == 0

    def test_single_offline_in_addis(self):
        breakdown = calculate_costs([make_selection(1, "Addis Ababa", [OFFLINE])])
        assert breakdown.maintenance_fees == 600
        assert breakdown.work_days == 1
        assert breakdown.crew_count == 1
        assert breakdown.per_diem == 1600
        assert breakdown.transportation == 0
        assert breakdown.total == 2200

    def test_fls_and_calibration_in_dire_dawa(self):
        breakdown = calculate_costs(
            [make_selection(1, "Dire Dawa", [FLS, CALIBRATION])]
        )
        assert breakdown.maintenance_fees == 2000
        assert breakdown.work_days == 1
        assert breakdown.crew_count == 2
        assert breakdown.per_diem == 3200
        assert breakdown.transportation == 2000
        assert breakdown.total == 7200

    def test_four_offline_vehicles_in_addis(self):
        selections = [make_selection(n, "Addis Ababa", [OFFLINE]) for n in range(4)]
        breakdown = calculate_costs(selections)
        assert breakdown.maintenance_fees == 2400
        assert breakdown.work_days == 2
        assert breakdown.crew_count == 1
        assert breakdown.per_diem == 3200
        assert breakdown.transportation == 0
        assert breakdown.total == 5600

    def test_vehicle_without_types_is_ignored(self):
        selections = [
            make_selection(1, "Addis Ababa", []),
            make_selection(2, "Hawassa", [FLS_CALIBRATION]),
        ]
        breakdown = calculate_costs(selections)
        assert breakdown.work_days == 1
        assert breakdown.crew_count == 2
        assert breakdown.maintenance_fees == 1400
        assert breakdown.per_diem == 3200
        assert breakdown.transportation == 1500
        assert breakdown.total == 6100

    def test_total_is_sum_of_parts(self):
        selections = [
            make_selection(1, "Jimma", [OFFLINE, FLS]),
            make_selection(2, "Adama", [CALIBRATION]),
            make_selection(3, "Jimma", [FLS_CALIBRATION]),
            make_selection(4, "Awash", [OFFLINE]),
        ]
        breakdown = calculate_costs(selections)
        assert breakdown.total == (
            breakdown.maintenance_fees + breakdown.per_diem + breakdown.transportation
        )
        # 2 days x 2 crew x 1600
        assert breakdown.per_diem == 6400
        assert breakdown.transportation == 1800 + 800 + 1200

    def test_idempotent(self):
        selections = [make_selection(1, "Gondar", [FLS])]
        assert calculate_costs(selections) == calculate_costs(selections)

    def test_custom_rates(self):
        rates = RateTable(
            maintenance_prices={OFFLINE: 1000},
            per_diem_rate=500,
            transportation_rates={"Addis Ababa": 300},
        )
        breakdown = calculate_costs([make_selection(1, types=[OFFLINE])], rates)
        assert breakdown.maintenance_fees == 1000
        assert breakdown.per_diem == 500
        assert breakdown.transportation == 300
        assert breakdown.total == 1800
