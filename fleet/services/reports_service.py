"""
Reports & analytics over fuel, maintenance and transfer history.

All figures are derived from the collections on every call through the data
facade, filtered by a reporting period and optionally one vehicle.
"""

import logging
from datetime import date, timedelta

from fleet.data.collections import Collection
from fleet.data.facade import DataAccessFacade, DataSource
from fleet.models.maintenance_record import MaintenanceStatus
from fleet.utils.exceptions import ValidationFailedException

logger = logging.getLogger(__name__)


PERIOD_DAYS = {
    "week":    7,
    "month":   30,
    "quarter": 91,
    "year":    365,
    "all":     None,
}

DATE_FIELDS = {
    Collection.FUEL_RECORDS:        "date",
    Collection.MAINTENANCE_RECORDS: "service_date",
    Collection.TRANSFERS:           "transfer_date",
}


def _money(value: float) -> float:
    return round(value, 2)


def _month(value: str | None) -> str | None:
    return value[:7] if value else None


class ReportsService:

    # ─── Loading ──────────────────────────────────────────────────────────────
    def _period_start(self, period: str, today: date | None = None) -> date | None:
        if period not in PERIOD_DAYS:
            raise ValidationFailedException(
                f"Unknown period '{period}', expected one of: {', '.join(PERIOD_DAYS)}", field="period",
            )
        days = PERIOD_DAYS[period]
        if days is None:
            return None
        return (today or date.today()) - timedelta(days=days)

    def load(
        self, facade: DataAccessFacade,
        period: str = "all", vehicle_id: str | None = None, today: date | None = None,
    ) -> dict:
        """Read and filter every collection a report needs."""
        start = self._period_start(period, today)
        demo = False
        data = {}

        for collection in (Collection.VEHICLES, *DATE_FIELDS):
            result = facade.list(collection)
            demo = demo or result.source == DataSource.SAMPLE
            records = result.data

            if collection in DATE_FIELDS:
                field = DATE_FIELDS[collection]
                if start is not None:
                    records = [r for r in records if (r.get(field) or "") >= start.isoformat()]
                if vehicle_id:
                    records = [r for r in records if r.get("vehicle_id") == vehicle_id]
            data[collection] = records

        return {
            "period":      period,
            "periodStart": start.isoformat() if start else None,
            "vehicleId":   vehicle_id,
            "vehicles":    data[Collection.VEHICLES],
            "fuel":        data[Collection.FUEL_RECORDS],
            "maintenance": data[Collection.MAINTENANCE_RECORDS],
            "transfers":   data[Collection.TRANSFERS],
            "demoMode":    demo or facade.is_using_sample_data(),
        }

    # ─── Figures ──────────────────────────────────────────────────────────────
    def kpis(self, fuel: list[dict], maintenance: list[dict], transfers: list[dict]) -> dict:
        fuel_cost = sum(float(r.get("total_cost") or 0) for r in fuel)
        maintenance_cost = sum(float(m.get("cost") or 0) for m in maintenance)
        liters = sum(float(r.get("quantity") or 0) for r in fuel)
        return {
            "totalFuelCost":        _money(fuel_cost),
            "totalMaintenanceCost": _money(maintenance_cost),
            "totalFuelLiters":      _money(liters),
            "avgFuelPrice":         _money(fuel_cost / liters) if liters > 0 else 0,
            "totalOperationalCost": _money(fuel_cost + maintenance_cost),
            "transferCount":        len(transfers),
        }

    def fuel_efficiency(self, fuel: list[dict], vehicles: list[dict]) -> list[dict]:
        """
        Per-vehicle km per liter. Distance is the spread of odometer readings
        across the vehicle's fuel records, so one reading gives no figure.
        """
        registrations = {v["id"]: v.get("registration_number") for v in vehicles}
        per_vehicle: dict[str, dict] = {}
        for r in fuel:
            entry = per_vehicle.setdefault(r.get("vehicle_id"), {"liters": 0.0, "readings": []})
            entry["liters"] += float(r.get("quantity") or 0)
            if r.get("odometer_reading") is not None:
                entry["readings"].append(int(r["odometer_reading"]))

        rows = []
        for vehicle_id, entry in per_vehicle.items():
            readings = entry["readings"]
            distance = max(readings) - min(readings) if len(readings) > 1 else 0
            rows.append({
                "vehicleId":    vehicle_id,
                "registration": registrations.get(vehicle_id, vehicle_id),
                "liters":       _money(entry["liters"]),
                "distance":     distance,
                "kmPerLiter":   _money(distance / entry["liters"]) if distance and entry["liters"] else 0,
            })
        return sorted(rows, key=lambda row: row["registration"] or "")

    def maintenance_cost_by_vehicle(self, maintenance: list[dict], vehicles: list[dict]) -> list[dict]:
        """Completed maintenance only; scheduled work has not been paid for yet."""
        registrations = {v["id"]: v.get("registration_number") for v in vehicles}
        costs: dict[str, dict] = {}
        for m in maintenance:
            if m.get("status") != MaintenanceStatus.COMPLETED.value:
                continue
            entry = costs.setdefault(m.get("vehicle_id"), {"cost": 0.0, "count": 0})
            entry["cost"] += float(m.get("cost") or 0)
            entry["count"] += 1

        return sorted(
            ({
                "vehicleId":    vehicle_id,
                "registration": registrations.get(vehicle_id, vehicle_id),
                "cost":         _money(entry["cost"]),
                "count":        entry["count"],
            } for vehicle_id, entry in costs.items()),
            key=lambda row: -row["cost"],
        )

    def vehicle_status_distribution(self, vehicles: list[dict]) -> dict[str, int]:
        counts: dict[str, int] = {}
        for v in vehicles:
            counts[v.get("status")] = counts.get(v.get("status"), 0) + 1
        return counts

    def monthly_trends(self, fuel: list[dict], maintenance: list[dict]) -> list[dict]:
        months: dict[str, dict] = {}
        for r in fuel:
            month = _month(r.get("date"))
            if month:
                months.setdefault(month, {"fuel": 0.0, "maintenance": 0.0})["fuel"] += float(r.get("total_cost") or 0)
        for m in maintenance:
            month = _month(m.get("service_date"))
            if month:
                months.setdefault(month, {"fuel": 0.0, "maintenance": 0.0})["maintenance"] += float(m.get("cost") or 0)

        return [{
            "month":       month,
            "fuel":        _money(totals["fuel"]),
            "maintenance": _money(totals["maintenance"]),
            "total":       _money(totals["fuel"] + totals["maintenance"]),
        } for month, totals in sorted(months.items())]

    # ─── Assembled reports ────────────────────────────────────────────────────
    def overview(self, facade: DataAccessFacade, period: str = "all", vehicle_id: str | None = None,
                 today: date | None = None) -> dict:
        d = self.load(facade, period, vehicle_id, today)
        logger.info(f"Overview report: period={period} vehicle={vehicle_id or 'all'} "
                    f"fuel={len(d['fuel'])} maintenance={len(d['maintenance'])}")
        return {
            "period":                   {"name": d["period"], "start": d["periodStart"]},
            "vehicleId":                d["vehicleId"],
            "kpis":                     self.kpis(d["fuel"], d["maintenance"], d["transfers"]),
            "fuelEfficiency":           self.fuel_efficiency(d["fuel"], d["vehicles"]),
            "maintenanceCostByVehicle": self.maintenance_cost_by_vehicle(d["maintenance"], d["vehicles"]),
            "vehicleStatus":            self.vehicle_status_distribution(d["vehicles"]),
            "monthlyTrends":            self.monthly_trends(d["fuel"], d["maintenance"]),
            "demoMode":                 d["demoMode"],
        }

    def fuel_expenses(self, facade: DataAccessFacade, period: str = "all", vehicle_id: str | None = None,
                      today: date | None = None) -> dict:
        d = self.load(facade, period, vehicle_id, today)
        k = self.kpis(d["fuel"], [], [])
        return {
            "period":  {"name": d["period"], "start": d["periodStart"]},
            "summary": {
                "entries":      len(d["fuel"]),
                "totalCost":    k["totalFuelCost"],
                "totalLiters":  k["totalFuelLiters"],
                "avgFuelPrice": k["avgFuelPrice"],
            },
            "byVehicle": self.fuel_efficiency(d["fuel"], d["vehicles"]),
            "demoMode":  d["demoMode"],
        }

    def maintenance_cost(self, facade: DataAccessFacade, period: str = "all", vehicle_id: str | None = None,
                         today: date | None = None) -> dict:
        d = self.load(facade, period, vehicle_id, today)
        completed = [m for m in d["maintenance"] if m.get("status") == MaintenanceStatus.COMPLETED.value]
        return {
            "period":  {"name": d["period"], "start": d["periodStart"]},
            "summary": {
                "totalRecords":   len(d["maintenance"]),
                "completedCount": len(completed),
                "openCount":      len(d["maintenance"]) - len(completed),
                "totalCost":      self.kpis([], d["maintenance"], [])["totalMaintenanceCost"],
            },
            "byVehicle": self.maintenance_cost_by_vehicle(d["maintenance"], d["vehicles"]),
            "demoMode":  d["demoMode"],
        }


reports_service = ReportsService()
