from conftest import make_hit
from image_search.services.formatter import (
    format_hit,
    qualified_name,
    shorten_index,
    truncate_description,
)


def test_shorten_index_keeps_last_two_labels():
    assert shorten_index("a.b.c.d") == "c.d"
    assert shorten_index("registry.hub.docker.com") == "docker.com"


def test_shorten_index_leaves_short_hosts_alone():
    assert shorten_index("docker.io") == "docker.io"
    assert shorten_index("localhost") == "localhost"


def test_truncate_long_description():
    description = "x" * 50

    truncated = truncate_description(description)

    assert len(truncated) == 47
    assert truncated.endswith("...")
    assert truncated[:44] == "x" * 44


def test_no_trunc_keeps_description():
    description = "x" * 50

    assert truncate_description(description, no_trunc=True) == description


def test_description_newlines_become_spaces():
    assert truncate_description("line one\nline two") == "line one line two"


def test_description_of_exactly_trunc_length_is_kept():
    assert truncate_description("y" * 44) == "y" * 44


def test_docker_hub_official_name_gets_library_namespace():
    assert qualified_name("docker.io", "docker.io", "alpine") == "docker.io/library/alpine"
    assert qualified_name("docker.io", "docker.io", "foo/bar") == "docker.io/foo/bar"


def test_other_registries_keep_full_registry_in_name():
    assert qualified_name("registry.fedoraproject.org", "fedoraproject.org", "fedora") == (
        "registry.fedoraproject.org/fedora"
    )


def test_format_hit_sets_markers_and_fields():
    hit = make_hit("alpine", description="A minimal image", stars=9000, official=True)

    result = format_hit(hit, "docker.io", "docker.io")

    assert result.index == "docker.io"
    assert result.name == "docker.io/library/alpine"
    assert result.description == "A minimal image"
    assert result.stars == 9000
    assert result.official == "[OK]"
    assert result.automated == ""
    assert result.tag == ""


def test_format_hit_handles_missing_description():
    hit = make_hit("foo")
    hit["description"] = None

    assert format_hit(hit, "quay.io", "quay.io").description == ""
