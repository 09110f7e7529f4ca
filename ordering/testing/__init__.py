from .scenario import OrderScenario

__all__ = ["OrderScenario"]
