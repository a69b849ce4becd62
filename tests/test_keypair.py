import pytest
from nkeys_core import codec
from nkeys_core.constants import PREFIX_BYTE_PRIVATE
from nkeys_core.exceptions import (
    FormatError, InvalidPrefixError, PublicKeyOnlyError, RandomSourceError,
    SealedMessageError, UnknownRoleError, UnsupportedOperationError, WipedKeyError,
)
from nkeys_core.keypair import KeyPair, KeyPairState, PublicKey, is_valid_public_key
from nkeys_core.roles import Role

SIGNING_ROLES = [r for r in Role if r.can_sign]

# RFC 8032 section 7.1, test 1
RFC8032_SEED = bytes.fromhex("9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60")
RFC8032_PUB = bytes.fromhex("d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a")
RFC8032_SIG = bytes.fromhex(
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555"
    "fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)

# RFC 7748 section 6.1, Alice
RFC7748_PRIV = bytes.fromhex("77076d0a7318a57d3c16c17251b26645df4c2f87ebc0992ab177fba51db92c2a")
RFC7748_PUB = bytes.fromhex("8520f0098930a754748b7ddcb43ef75a0dbf3a0d26381af4eba4a98eaa9b4e6a")


def _flip_bit(data, i):
    b = bytearray(data)
    b[i // 8] ^= 1 << (i % 8)
    return bytes(b)


@pytest.mark.parametrize("role", list(Role))
def test_seed_roundtrip(role):
    kp = KeyPair.generate(role)
    assert kp.state is KeyPairState.GENERATED
    back = KeyPair.from_seed(kp.seed())
    assert back.state is KeyPairState.RECONSTRUCTED
    assert back.role is role
    assert back.public_key() == kp.public_key()
    assert back.private_key() == kp.private_key()
    assert back.seed() == kp.seed()


@pytest.mark.parametrize("role", list(Role))
def test_encoded_forms(role):
    kp = KeyPair.generate(role)
    assert codec.role_of(kp.public_key()) is role
    assert codec.role_of(kp.seed()) is role
    prefix, private = codec.decode(kp.private_key())
    assert prefix == PREFIX_BYTE_PRIVATE
    assert len(private) == (64 if role.can_sign else 32)
    assert kp.seed().startswith("S" + kp.public_key()[0])
    assert kp.private_key().startswith("P")


def test_generate_accepts_role_names():
    assert KeyPair.generate("Operator").role is Role.OPERATOR
    with pytest.raises(UnknownRoleError):
        KeyPair.generate("bogus")


def test_user_scenario():
    kp = KeyPair.generate("user")
    assert codec.decode_seed(kp.seed())[0] is Role.USER
    assert codec.decode_public(kp.public_key())[0] is Role.USER
    prefix, _ = codec.decode(kp.private_key())
    assert prefix == PREFIX_BYTE_PRIVATE
    assert prefix not in (Role.USER.prefix, codec.seed_tag(Role.USER)[0])


def test_rfc8032_vector():
    kp = KeyPair.from_raw_seed(Role.ACCOUNT, RFC8032_SEED)
    assert kp.raw_public_key() == RFC8032_PUB
    assert kp.sign(b"") == RFC8032_SIG
    assert codec.decode_private(kp.private_key()) == RFC8032_SEED + RFC8032_PUB


def test_rfc7748_vector():
    kp = KeyPair.from_raw_seed(Role.CURVE, RFC7748_PRIV)
    assert kp.raw_public_key() == RFC7748_PUB
    assert kp.public_key().startswith("X")
    assert codec.decode_private(kp.private_key()) == RFC7748_PRIV


@pytest.mark.parametrize("role", SIGNING_ROLES)
def test_sign_verify(role):
    kp = KeyPair.generate(role)
    msg = b"challenge nonce"
    sig = kp.sign(msg)
    assert len(sig) == 64
    assert kp.verify(msg, sig)
    assert KeyPair.from_public_key(kp.public_key()).verify(msg, sig)


def test_verify_rejects_bit_flips():
    kp = KeyPair.generate(Role.USER)
    msg = b"abc"
    sig = kp.sign(msg)
    for i in range(len(msg) * 8):
        assert not kp.verify(_flip_bit(msg, i), sig)
    for i in range(len(sig) * 8):
        assert not kp.verify(msg, _flip_bit(sig, i))


def test_verify_with_other_key_fails():
    a, b = KeyPair.generate(Role.USER), KeyPair.generate(Role.USER)
    assert not b.verify(b"msg", a.sign(b"msg"))


def test_curve_scenario():
    alice = KeyPair.generate("curve")
    bob = KeyPair.generate("curve")
    with pytest.raises(UnsupportedOperationError):
        alice.sign(b"msg")
    with pytest.raises(UnsupportedOperationError):
        alice.verify(b"msg", bytes(64))

    sealed = alice.seal(b"hello bob", bob.public_key())
    assert sealed != b"hello bob"
    assert bob.open(sealed, alice.public_key()) == b"hello bob"


def test_open_fails_for_mismatched_keys():
    alice, bob, eve = (KeyPair.generate(Role.CURVE) for _ in range(3))
    sealed = alice.seal(b"secret", bob.public_key())
    with pytest.raises(SealedMessageError):
        eve.open(sealed, alice.public_key())
    with pytest.raises(SealedMessageError):
        bob.open(sealed, eve.public_key())


def test_open_rejects_tampering():
    alice, bob = KeyPair.generate(Role.CURVE), KeyPair.generate(Role.CURVE)
    sealed = alice.seal(b"secret", bob.public_key())
    with pytest.raises(SealedMessageError):
        bob.open(_flip_bit(sealed, len(sealed) * 8 - 1), alice.public_key())
    with pytest.raises(SealedMessageError):
        bob.open(b"xkc1" + bytes(8), alice.public_key())
    with pytest.raises(SealedMessageError):
        bob.open(b"junk" + sealed[4:], alice.public_key())


def test_seal_requires_curve_recipient():
    alice = KeyPair.generate(Role.CURVE)
    user = KeyPair.generate(Role.USER)
    with pytest.raises(InvalidPrefixError):
        alice.seal(b"msg", user.public_key())
    with pytest.raises(UnsupportedOperationError):
        user.seal(b"msg", alice.public_key())
    with pytest.raises(UnsupportedOperationError):
        user.open(b"msg", alice.public_key())


def test_uniqueness():
    keys = {KeyPair.generate(Role.ACCOUNT).public_key() for _ in range(10_000)}
    assert len(keys) == 10_000


def test_injected_random_source_is_deterministic():
    a = KeyPair.generate(Role.SERVER, rand=lambda n: b"\x07" * n)
    b = KeyPair.generate(Role.SERVER, rand=lambda n: b"\x07" * n)
    assert a.seed() == b.seed()
    assert a.public_key() == b.public_key()


def test_random_source_failures():
    def broken(n):
        raise OSError("no entropy")

    with pytest.raises(RandomSourceError):
        KeyPair.generate(Role.USER, rand=broken)
    with pytest.raises(RandomSourceError):
        KeyPair.generate(Role.USER, rand=lambda n: b"\x00" * (n - 1))


def test_from_seed_rejects_non_seed():
    kp = KeyPair.generate(Role.USER)
    with pytest.raises(InvalidPrefixError):
        KeyPair.from_seed(kp.public_key())
    with pytest.raises(FormatError):
        KeyPair.from_seed("SUnotaseed")


def test_from_raw_seed_length():
    with pytest.raises(FormatError):
        KeyPair.from_raw_seed(Role.USER, bytes(31))


def test_public_key_only():
    kp = KeyPair.generate(Role.ACCOUNT)
    pub = KeyPair.from_public_key(kp.public_key())
    assert isinstance(pub, PublicKey)
    assert pub.role is Role.ACCOUNT
    assert pub.public_key() == kp.public_key()
    assert pub == PublicKey.from_encoded(kp.public_key())
    for call in (pub.private_key, pub.seed, lambda: pub.sign(b"x"),
                 lambda: pub.seal(b"x", kp.public_key()), lambda: pub.open(b"x", kp.public_key())):
        with pytest.raises(PublicKeyOnlyError):
            call()
    # still an UnsupportedOperationError for callers that only catch the base kind
    with pytest.raises(UnsupportedOperationError):
        pub.sign(b"x")


def test_is_valid_public_key():
    kp = KeyPair.generate(Role.USER)
    assert is_valid_public_key(kp.public_key())
    assert is_valid_public_key(kp.public_key(), "user")
    assert not is_valid_public_key(kp.public_key(), Role.ACCOUNT)
    assert not is_valid_public_key(kp.seed())
    assert not is_valid_public_key("UBOGUS")
    with pytest.raises(UnknownRoleError):
        is_valid_public_key(kp.public_key(), "bogus")


def test_wipe_and_context_manager():
    with KeyPair.generate(Role.USER) as kp:
        public = kp.public_key()
        seed = kp.seed()
        kp.sign(b"ok")
    assert kp.wiped
    assert kp.public_key() == public
    for call in (kp.seed, kp.private_key, kp.identity, lambda: kp.sign(b"x")):
        with pytest.raises(WipedKeyError):
            call()
    assert KeyPair.from_seed(seed).public_key() == public


def test_repr_hides_secrets():
    kp = KeyPair.generate(Role.USER)
    text = repr(kp) + repr(kp.identity())
    assert kp.public_key() in text
    assert kp.seed() not in text
    assert kp.private_key() not in text


def test_assemble_rejects_mismatched_family():
    from nkeys_core import crypto
    from nkeys_core.identity import assemble
    from nkeys_core.roles import KeyFamily

    material = crypto.derive(KeyFamily.ED25519, bytes(32))
    with pytest.raises(UnsupportedOperationError):
        assemble(Role.CURVE, material)
    assert assemble(Role.USER, material).public.startswith("U")
