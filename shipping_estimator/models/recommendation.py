"""
Carrier service recommendation returned for a shipment weight.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class ServiceRecommendation:
    eligible_services: Tuple[str, ...]
    warnings: Tuple[str, ...] = field(default=())
    requirements: Tuple[str, ...] = field(default=())
    bracket: str = field(default="")

    def allows(self, service_name: str) -> bool:
        """Whether a quoted service name belongs to the eligible tiers."""
        wanted = service_name.strip().lower()
        return any(service.lower() == wanted for service in self.eligible_services)

    def to_dict(self) -> Dict[str, str | List[str]]:
        return {
            "bracket": self.bracket,
            "eligible_services": list(self.eligible_services),
            "warnings": list(self.warnings),
            "requirements": list(self.requirements),
        }
