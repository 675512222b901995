from src.personnel_hub.personnel_hub.payroll.calculator.standard_calculator import (
    StandardNetSalaryCalculator,
    calculate_net_salary,
)


def test_standard_calculator_applies_deductions_and_additions():
    calc = StandardNetSalaryCalculator()
    assert calc.net_salary(10000, 1500, 200) == 8700.0


def test_missing_or_invalid_inputs_count_as_zero():
    assert calculate_net_salary(10000, None, "n/a") == 10000.0


def test_result_rounded_to_cents():
    assert calculate_net_salary(1000.005, 0.001, 0) == 1000.0
