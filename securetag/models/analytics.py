# models/analytics.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId

from securetag.models.enums import VerificationMethod, VerificationResult
from securetag.utils.date_helpers import isoformat_or_none


def empty_metrics() -> Dict[str, Any]:
    """Zeroed counters for a new bucket"""
    return {
        "total_verifications": 0,
        "methods": {method.value: 0 for method in VerificationMethod},
        "results": {result.value: 0 for result in VerificationResult}
    }


def increments_for(method: VerificationMethod, result: VerificationResult) -> Dict[str, int]:
    """Dotted counter paths bumped by one verification"""
    return {
        "metrics.total_verifications": 1,
        f"metrics.methods.{method.value}": 1,
        f"metrics.results.{result.value}": 1
    }


@dataclass
class AnalyticsBucket:
    """Per-day, per-manufacturer verification counters"""
    date: datetime
    manufacturer_id: Optional[ObjectId] = None
    metrics: Dict[str, Any] = field(default_factory=empty_metrics)
    _id: Optional[ObjectId] = None

    @property
    def total_verifications(self) -> int:
        return self.metrics.get("total_verifications", 0)

    def method_count(self, method: VerificationMethod) -> int:
        return self.metrics.get("methods", {}).get(method.value, 0)

    def result_count(self, result: VerificationResult) -> int:
        return self.metrics.get("results", {}).get(result.value, 0)

    @classmethod
    def from_dict(cls, doc: Dict[str, Any]) -> 'AnalyticsBucket':
        metrics = empty_metrics()
        stored = doc.get("metrics") or {}
        metrics["total_verifications"] = stored.get("total_verifications", 0)
        metrics["methods"].update(stored.get("methods") or {})
        metrics["results"].update(stored.get("results") or {})
        return cls(
            _id=doc.get("_id"),
            date=doc["date"],
            manufacturer_id=doc.get("manufacturer_id"),
            metrics=metrics
        )

    def to_public_dict(self) -> Dict[str, Any]:
        return {
            "date": isoformat_or_none(self.date),
            "manufacturer": str(self.manufacturer_id) if self.manufacturer_id else None,
            "totalVerifications": self.total_verifications,
            "methods": dict(self.metrics["methods"]),
            "results": dict(self.metrics["results"])
        }
