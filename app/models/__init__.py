from app.models.car import Car
from app.models.mechanic import Mechanic
from app.models.service import Service, ServiceMechanic, ServiceStatus
from app.models.user import User

__all__ = ["Car", "Mechanic", "Service", "ServiceMechanic", "ServiceStatus", "User"]
