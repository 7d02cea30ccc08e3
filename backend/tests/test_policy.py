"""Role policy tests."""
import pytest

from academy.domain.access.policy import (
    Role,
    can_manage_admins,
    can_manage_content,
    can_view_student_data,
    capabilities_for,
)


def test_student_has_no_capabilities():
    caps = capabilities_for(Role.STUDENT)
    assert not caps.manage_admins
    assert not caps.manage_content
    assert not caps.view_student_data
    assert not caps.has_any


def test_admin_manages_content_but_not_admins():
    assert not can_manage_admins(Role.ADMIN)
    assert can_manage_content(Role.ADMIN)
    assert can_view_student_data(Role.ADMIN)


def test_super_admin_has_everything():
    caps = capabilities_for(Role.SUPER_ADMIN)
    assert caps.manage_admins and caps.manage_content and caps.view_student_data


@pytest.mark.parametrize("role", list(Role))
def test_capabilities_nest(role):
    # manage admins => manage content => view student data
    if can_manage_admins(role):
        assert can_manage_content(role)
    if can_manage_content(role):
        assert can_view_student_data(role)


def test_plain_string_roles_are_accepted():
    assert can_manage_admins("super_admin")
    assert not can_manage_content("student")


def test_unknown_role_is_a_programming_error():
    with pytest.raises(ValueError):
        capabilities_for("instructor")
