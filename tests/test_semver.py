"""Tests for version parsing and precedence ordering."""

import itertools

import pytest
import semantic_version

from src.versioning.errors import InvalidVersionFormat
from src.versioning.semver import (
    PrereleaseOrdering,
    Version,
    compare_versions,
    identity_equals,
    parse_version,
    precedence_equals,
    sort_versions,
)


# Ascending SemVer 2.0.0 precedence, one entry per distinct precedence.
ORDERED = [
    "0.0.0",
    "0.0.1",
    "0.1.0",
    "1.0.0-0",
    "1.0.0-0.0",
    "1.0.0-1",
    "1.0.0-2",
    "1.0.0-10",
    "1.0.0-A",
    "1.0.0-a",
    "1.0.0-alpha",
    "1.0.0-alpha.1",
    "1.0.0-alpha.beta",
    "1.0.0-beta",
    "1.0.0-beta.2",
    "1.0.0-beta.11",
    "1.0.0-rc.1",
    "1.0.0",
    "1.0.1",
    "1.9.0",
    "1.10.0",
    "2.0.0",
    "10.0.0",
]


class TestParseVersion:
    """Strict parsing of version strings."""

    def test_parse_core_fields(self):
        v = parse_version("1.22.333")
        assert (v.major, v.minor, v.patch) == (1, 22, 333)
        assert v.prerelease == ()
        assert v.build == ()
        assert v.is_prerelease is False

    def test_parse_prerelease_and_build(self):
        v = parse_version("1.0.0-alpha.1+build.007.x-y")
        assert v.prerelease == ("alpha", "1")
        assert v.build == ("build", "007", "x-y")
        assert v.is_prerelease is True

    def test_parse_large_numbers(self):
        v = parse_version("18446744073709551616.0.0")
        assert v.major == 18446744073709551616

    def test_classmethod_alias(self):
        assert Version.parse("1.2.3") == parse_version("1.2.3")

    @pytest.mark.parametrize("text", [
        "1.2",
        "v1.2.3",
        "1.2.3-",
        "01.2.3",
        "1.02.3",
        "1.2.03",
        "1.2.3-01",
        "1.2.3-alpha..1",
        "1.2.3+",
        "1.2.3+build..1",
        "1.2.3-alpha_1",
        " 1.2.3",
        "1.2.3 ",
        "1.2.3\n",
        "1.2.3.4",
        "",
        "-1.2.3",
        "1.2.3-beta+exp+sha",
        "١.2.3",
    ])
    def test_rejects_malformed(self, text):
        with pytest.raises(InvalidVersionFormat):
            parse_version(text)

    def test_rejects_non_string(self):
        with pytest.raises(InvalidVersionFormat):
            parse_version(123)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_version("nope")

    def test_prerelease_leading_zero_allowed_when_alphanumeric(self):
        assert parse_version("1.0.0-0a").prerelease == ("0a",)
        assert parse_version("1.0.0-0").prerelease == ("0",)

    def test_round_trip(self):
        for text in ORDERED + ["1.0.0+build.1", "1.0.0-rc.1+exp.sha.5114f85"]:
            v = parse_version(text)
            assert str(v) == text
            assert parse_version(str(v)) == v


class TestVersionConstruction:
    """Direct construction validates invariants."""

    def test_construct_from_fields(self):
        v = Version(1, 2, 3, ("beta", "2"), ("sha",))
        assert str(v) == "1.2.3-beta.2+sha"

    def test_dotted_strings_are_split(self):
        v = Version(1, 2, 3, prerelease="rc.1", build="b.7")
        assert v.prerelease == ("rc", "1")
        assert v.build == ("b", "7")

    def test_lists_become_tuples(self):
        v = Version(1, 0, 0, ["alpha"])
        assert v.prerelease == ("alpha",)
        hash(v)

    @pytest.mark.parametrize("kwargs", [
        {"major": -1, "minor": 0, "patch": 0},
        {"major": 1, "minor": True, "patch": 0},
        {"major": "1", "minor": 0, "patch": 0},
        {"major": 1, "minor": 0, "patch": 0, "prerelease": ("01",)},
        {"major": 1, "minor": 0, "patch": 0, "prerelease": ("",)},
        {"major": 1, "minor": 0, "patch": 0, "build": ("a b",)},
        {"major": 1, "minor": 0, "patch": 0, "prerelease": (1,)},
        {"major": 1, "minor": 0, "patch": 0, "build": ("ok", 7)},
    ])
    def test_invalid_fields(self, kwargs):
        with pytest.raises(InvalidVersionFormat):
            Version(**kwargs)

    def test_immutable(self):
        v = parse_version("1.0.0")
        with pytest.raises(AttributeError):
            v.major = 2


class TestCompareVersions:
    """SemVer precedence rules."""

    def test_numeric_not_lexical(self):
        assert parse_version("1.9.0") < parse_version("1.10.0")

    def test_prerelease_chain(self):
        assert parse_version("1.0.0-alpha") < parse_version("1.0.0")
        assert parse_version("1.0.0-alpha") < parse_version("1.0.0-alpha.1")
        assert parse_version("1.0.0-alpha.1") < parse_version("1.0.0-alpha.beta")
        assert parse_version("1.0.0-beta.2") < parse_version("1.0.0-beta.11")

    def test_numeric_identifier_below_alphanumeric(self):
        assert compare_versions(parse_version("1.0.0-999"), parse_version("1.0.0-a")) == -1

    def test_alphanumeric_is_case_sensitive_ordinal(self):
        assert compare_versions(parse_version("1.0.0-Z"), parse_version("1.0.0-a")) == -1
        assert compare_versions(parse_version("1.0.0-a-b"), parse_version("1.0.0-a0")) == -1

    def test_build_ignored_in_ordering(self):
        a = parse_version("1.0.0+build1")
        b = parse_version("1.0.0+build2")
        assert compare_versions(a, b) == 0
        assert precedence_equals(a, b)
        assert not identity_equals(a, b)
        assert a != b
        assert a <= b and a >= b
        assert not a < b and not a > b

    def test_ordered_corpus(self):
        versions = [parse_version(t) for t in ORDERED]
        for i, j in itertools.product(range(len(versions)), repeat=2):
            expected = (i > j) - (i < j)
            assert compare_versions(versions[i], versions[j]) == expected, (ORDERED[i], ORDERED[j])

    def test_total_order_properties(self):
        corpus = [parse_version(t) for t in ORDERED + ["1.0.0+x", "1.0.0-alpha.1+y"]]
        for a, b in itertools.product(corpus, repeat=2):
            outcomes = [a < b, precedence_equals(a, b), a > b]
            assert outcomes.count(True) == 1
            assert compare_versions(a, b) == -compare_versions(b, a)
        for a, b, c in itertools.product(corpus[::3], repeat=3):
            if a <= b and b <= c:
                assert a <= c

    def test_compare_with_non_version(self):
        assert parse_version("1.0.0") != "1.0.0"
        with pytest.raises(TypeError):
            parse_version("1.0.0") < "2.0.0"  # pylint: disable=expression-not-assigned

    def test_hash_follows_identity(self):
        assert len({parse_version("1.0.0"), parse_version("1.0.0"), parse_version("1.0.0+b")}) == 2

    def test_agrees_with_semantic_version(self):
        extra = ["1.0.0-00a", "1.0.0--", "1.0.0-alpha.1.0", "1.0.0+b.2", "1.0.0-rc.1+b.1"]
        corpus = [parse_version(t) for t in ORDERED + extra]
        for a, b in itertools.product(corpus, repeat=2):
            assert (a < b) == (a.to_semantic() < b.to_semantic())
            assert precedence_equals(a, b) == (a.to_semantic().precedence_key == b.to_semantic().precedence_key)

    def test_precedence_key_is_semantic_version_key(self):
        v = parse_version("1.0.0-beta.11+sha")
        assert v.precedence_key() == tuple(semantic_version.Version("1.0.0-beta.11").precedence_key[:4])


class TestLegacyOrdering:
    """Compatibility ordering reproducing the previous manager."""

    def test_prerelease_compared_as_one_string(self):
        a = parse_version("1.0.0-beta.11")
        b = parse_version("1.0.0-beta.2")
        assert compare_versions(a, b, PrereleaseOrdering.LEGACY) == -1
        assert compare_versions(a, b) == 1

    def test_release_sorts_before_prerelease(self):
        release = parse_version("1.0.0")
        pre = parse_version("1.0.0-alpha")
        assert compare_versions(release, pre, PrereleaseOrdering.LEGACY) == -1

    def test_core_fields_unchanged(self):
        assert compare_versions(parse_version("1.9.0"), parse_version("1.10.0"), PrereleaseOrdering.LEGACY) == -1

    def test_build_ignored(self):
        assert compare_versions(parse_version("1.0.0+a"), parse_version("1.0.0+b"), PrereleaseOrdering.LEGACY) == 0


class TestSortVersions:
    """Sorting helpers."""

    def test_sort_mixed_input(self):
        result = sort_versions(["1.10.0", parse_version("1.2.0"), "1.2.0-rc.1"])
        assert [str(v) for v in result] == ["1.2.0-rc.1", "1.2.0", "1.10.0"]

    def test_sort_reverse(self):
        result = sort_versions(["1.0.0", "2.0.0", "1.5.0"], reverse=True)
        assert [str(v) for v in result] == ["2.0.0", "1.5.0", "1.0.0"]

    def test_sort_shuffled_corpus(self):
        shuffled = ORDERED[1::2] + ORDERED[::2]
        assert [str(v) for v in sort_versions(shuffled)] == ORDERED

    def test_sort_legacy(self):
        result = sort_versions(["1.0.0-beta.2", "1.0.0", "1.0.0-beta.11"], PrereleaseOrdering.LEGACY)
        assert [str(v) for v in result] == ["1.0.0", "1.0.0-beta.11", "1.0.0-beta.2"]

    def test_sort_rejects_invalid(self):
        with pytest.raises(InvalidVersionFormat):
            sort_versions(["1.0.0", "1.0"])


class TestSemanticVersionInterop:
    """Conversion to and from semantic_version."""

    def test_to_semantic(self):
        sv = parse_version("1.2.3-rc.1+b5").to_semantic()
        assert isinstance(sv, semantic_version.Version)
        assert str(sv) == "1.2.3-rc.1+b5"

    def test_from_semantic(self):
        v = Version.from_semantic(semantic_version.Version("2.0.0-beta.3"))
        assert v == parse_version("2.0.0-beta.3")
