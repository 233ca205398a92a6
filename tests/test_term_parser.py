from image_search.services.term_parser import resolve_registries, split_term


def test_split_term_without_registry():
    assert split_term("alpine") == (None, "alpine")


def test_split_term_uses_everything_before_first_slash():
    assert split_term("quay.io/podman/stable") == ("quay.io", "podman/stable")


def test_split_term_treats_namespace_as_registry():
    # known limitation: a namespaced Docker Hub name looks registry-qualified
    assert split_term("library/ubuntu") == ("library", "ubuntu")


def test_resolve_registries_appends_explicit_registry():
    registries, term = resolve_registries("myregistry.example.com/foo", ["docker.io", "quay.io"])

    assert registries == ["docker.io", "quay.io", "myregistry.example.com"]
    assert term == "foo"


def test_resolve_registries_keeps_configured_list_intact():
    configured = ["docker.io"]
    registries, term = resolve_registries("alpine", configured)

    assert registries == ["docker.io"]
    assert registries is not configured
    assert term == "alpine"
