from hostel_dashboard.components import ComponentRegistry, registry
from hostel_dashboard.components.fees import FeesService


def test_every_component_is_registered():
    assert set(registry.get_all_components()) == {
        'attendance', 'auth', 'complaints', 'fees', 'leave', 'mess_menu', 'notices', 'room_management', 'rooms',
        'students', 'system_logs', 'wardens',
    }
    assert registry.get_component('fees') is FeesService


def test_navigation_only_lists_pages_for_role():
    local = ComponentRegistry()
    local.register_component('a', object, pages={'admin': ('A', 'a.page')})
    local.register_component('b', object, pages={'admin': ('B', 'b.page'), 'student': ('B', 'b.mine')})
    assert local.navigation_for('admin') == [('A', 'a.page'), ('B', 'b.page')]
    assert local.navigation_for('student') == [('B', 'b.mine')]
    assert local.navigation_for('warden') == []
