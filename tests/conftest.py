# tests/conftest.py
import pytest
from cryptography.hazmat.primitives.asymmetric import ec, rsa


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_public_key(rsa_private_key):
    return rsa_private_key.public_key()


@pytest.fixture(scope="session")
def ec256_private_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec384_private_key():
    return ec.generate_private_key(ec.SECP384R1())


@pytest.fixture(scope="session")
def ec521_private_key():
    return ec.generate_private_key(ec.SECP521R1())
