"""
Component registry for dashboard
Each component package registers its init function on import; the app
factory initializes every registered component in registration order.
"""


class ComponentRegistry:
    """Registry for dashboard components"""

    def __init__(self):
        self.components = {}

    def register_component(self, name, initializer):
        """Register a dashboard component"""
        self.components[name] = initializer

    def init_all(self, app):
        for name, initializer in self.components.items():
            initializer(app)
            app.logger.debug(f'Initialized component {name}')


# Global registry instance
registry = ComponentRegistry()


def register_component(name):
    """Decorator for registering components"""
    def decorator(initializer):
        registry.register_component(name, initializer)
        return initializer
    return decorator


__all__ = ['ComponentRegistry', 'registry', 'register_component']
