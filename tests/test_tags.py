from infra_storage.lib.tags import get_tags


def test_standard_tags():
    tags = get_tags(service="storage", role="account", group="stdata")

    assert tags["Name"] == "storage-account-stdata"
    assert tags["test:service"] == "storage"
    assert tags["test:role"] == "account"
    assert tags["test:group"] == "stdata"
    assert tags["test:createdby"] == "pulumi"
    assert tags["test:stack"] == "test"
    assert tags["test:project"] == "storage"
    assert tags["test:team"] == "storage-team"
    assert tags["managed-by"] == "infra-storage"


def test_group_defaults_to_main():
    tags = get_tags(service="storage", role="lock")

    assert tags["Name"] == "storage-lock"
    assert tags["test:group"] == "main"


def test_extra_tags_win():
    tags = get_tags(service="storage", role="account", extra={"managed-by": "someone", "cost-center": "data"})

    assert tags["managed-by"] == "someone"
    assert tags["cost-center"] == "data"
