from .logger import SUMMARY, Level, MaintenanceLogger

__all__ = ["MaintenanceLogger", "Level", "SUMMARY"]
