"""
Component registry for dashboard
This module manages all dashboard components and the pages they add to
each role's navigation.
"""


class ComponentRegistry:
    """Registry for dashboard components"""

    def __init__(self):
        self.components = {}
        self.pages = {}

    def register_component(self, name, component_class, pages=None):
        """Register a dashboard component and its per-role pages

        `pages` maps a role to a (title, endpoint) pair.
        """
        self.components[name] = component_class
        self.pages[name] = dict(pages or {})

    def get_component(self, name):
        """Get a registered component"""
        return self.components.get(name)

    def get_all_components(self):
        """Get all registered components"""
        return self.components

    def navigation_for(self, role):
        """(title, endpoint) pairs for every page the role can open"""
        links = []
        for name in self.components:
            page = self.pages[name].get(role)
            if page:
                links.append(page)
        return links


# Global registry instance
registry = ComponentRegistry()


def register_component(name, pages=None):
    """Decorator for registering components"""
    def decorator(component_class):
        registry.register_component(name, component_class, pages=pages)
        return component_class
    return decorator


__all__ = ['ComponentRegistry', 'registry', 'register_component']
