from .settings import DashboardConfig, TestingConfig

__all__ = ['DashboardConfig', 'TestingConfig']
