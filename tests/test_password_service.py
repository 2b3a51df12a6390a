from app.services.password_service import CredentialEncoding, PasswordService


def test_encode_hashes_with_tag():
    service = PasswordService(rounds=4)

    stored, encoding = service.encode("s3cret")

    assert encoding == CredentialEncoding.HASHED
    assert stored != "s3cret"
    assert stored.startswith("$2")
    assert service.verify("s3cret", stored, encoding.value)
    assert not service.verify("wrong", stored, encoding.value)


def test_plain_rows_are_compared_directly():
    service = PasswordService(rounds=4)

    assert service.verify("legacy", "legacy", "plain")
    assert not service.verify("legacy", "other", "plain")


def test_generated_passwords_differ():
    service = PasswordService(rounds=4)

    first, second = service.generate(), service.generate()

    assert first and second
    assert first != second
