import pytest
from nkeys_core.roles import KeyFamily, Role, prefix_for, role_for, role_from_name, family_for
from nkeys_core.exceptions import UnknownRoleError
from nkeys_core.utils import b32e
from nkeys_core.constants import PREFIX_BYTE_UNKNOWN


def test_every_role_is_mapped():
    prefixes = {prefix_for(r) for r in Role}
    assert len(prefixes) == len(Role)
    for role in Role:
        assert role_for(prefix_for(role)) is role
        assert family_for(role) in (KeyFamily.ED25519, KeyFamily.X25519)


@pytest.mark.parametrize("role,letter", [
    (Role.OPERATOR, "O"), (Role.ACCOUNT, "A"), (Role.USER, "U"), (Role.SERVER, "N"),
    (Role.CLUSTER, "C"), (Role.MODULE, "M"), (Role.CURVE, "X"),
])
def test_prefix_letters(role, letter):
    assert b32e(bytes([prefix_for(role)]))[0] == letter


def test_only_curve_is_x25519():
    assert [r for r in Role if not r.can_sign] == [Role.CURVE]
    assert Role.CURVE.family is KeyFamily.X25519
    assert Role.USER.family is KeyFamily.ED25519


@pytest.mark.parametrize("name", ["user", "USER", "User", " user "])
def test_role_names_case_insensitive(name):
    assert role_from_name(name) is Role.USER


@pytest.mark.parametrize("name", ["bogus", "", "users", None, 7])
def test_unknown_role_name(name):
    with pytest.raises(UnknownRoleError):
        role_from_name(name)


def test_unknown_prefix_byte():
    with pytest.raises(UnknownRoleError):
        role_for(PREFIX_BYTE_UNKNOWN)
    with pytest.raises(UnknownRoleError):
        role_for(1)
