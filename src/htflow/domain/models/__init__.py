"""Domain models"""

from htflow.domain.models.generation_result import GenerationResult, Source
from htflow.domain.models.vehicle_query import VehicleQuery

__all__ = ["GenerationResult", "Source", "VehicleQuery"]
