"""
Trip cost calculations.

Fuel cost of a trip is estimated from the vehicle's historical consumption
(km per litre across all of its trips) and the trip's fuel price, falling back
to the last price paid for that vehicle.
"""

from __future__ import annotations

from collections.abc import Sequence

from logimaster.domain.entities import Operation


def last_fuel_price(plate: str, operations: Sequence[Operation]) -> float:
    """Price per litre of the vehicle's most recent priced trip, else 0."""
    if not plate:
        return 0.0
    priced = [op for op in operations if op.vehicle_plate == plate and op.fuel_price > 0]
    if not priced:
        return 0.0
    # sorted() is stable, ties keep insertion order
    priced = sorted(priced, key=lambda op: op.date, reverse=True)
    return priced[0].fuel_price


def historical_average(plate: str, operations: Sequence[Operation]) -> float:
    """Average km per litre for a vehicle, 0 when no litres are known."""
    if not plate:
        return 0.0
    km_total = 0.0
    litres_total = 0.0
    for op in operations:
        if op.vehicle_plate != plate:
            continue
        km_total += op.km_driven
        if op.fuel > 0 and op.fuel_price > 0:
            litres_total += op.fuel / op.fuel_price
    if litres_total == 0:
        return 0.0
    return km_total / litres_total


def trip_fuel_cost(operation: Operation | None, operations: Sequence[Operation]) -> float:
    if operation is None or not operation.vehicle_plate or not operation.km_driven:
        return 0.0
    average = historical_average(operation.vehicle_plate, operations)
    if average == 0:
        return 0.0
    price = operation.fuel_price
    if price <= 0:
        price = last_fuel_price(operation.vehicle_plate, operations)
    if price == 0:
        return 0.0
    return (operation.km_driven / average) * price


def helpers_total(operation: Operation) -> float:
    return sum(shift.daily_rate for shift in operation.helpers)


def operation_costs(operation: Operation, operations: Sequence[Operation]) -> float:
    """Commission + tolls/expenses + helper day-rates + estimated fuel."""
    return (
        operation.commission
        + operation.expenses
        + helpers_total(operation)
        + trip_fuel_cost(operation, operations)
    )


def operation_net(operation: Operation, operations: Sequence[Operation]) -> float:
    return operation.revenue - operation_costs(operation, operations)


def balance_due(operation: Operation) -> float:
    """Amount still owed by the client after the advance."""
    return operation.revenue - operation.advance


def in_month(date_str: str, year: int, month: int) -> bool:
    parts = date_str.strip().split("-")
    if len(parts) < 2:
        return False
    try:
        return int(parts[0]) == year and int(parts[1]) == month
    except ValueError:
        return False
