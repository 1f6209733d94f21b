"""
Tests for ini_object.docs.
"""

from dataclasses import dataclass

from ini_object.docs import attribute_docs, fetch_title, type_title

from sample_configs import (
    DbConfig,
    ExternalApiUrls,
    SectionsConfig,
    TitledFields,
    UnixNotify,
    ValuesConfig,
)


# ------------------------------------------------------------------------------
# fetch_title
# ------------------------------------------------------------------------------


def test_fetch_title_first_content_line():
    doc = """
    Application name

    Used in log lines and the process title.
    """
    assert fetch_title(doc) == "Application name"


def test_fetch_title_single_line():
    assert fetch_title("Listening port") == "Listening port"


def test_fetch_title_strips_var_marker():
    assert fetch_title("@var string Application name") == "string Application name"
    assert fetch_title("@var    int") == "int"


def test_fetch_title_empty_inputs():
    assert fetch_title(None) == ""
    assert fetch_title("") == ""
    assert fetch_title("   \n\n   ") == ""


# ------------------------------------------------------------------------------
# type_title
# ------------------------------------------------------------------------------


def test_type_title_uses_own_docstring():
    assert type_title(ValuesConfig) == "Values"
    assert type_title(DbConfig) == "Database connection"


def test_type_title_ignores_generated_dataclass_doc():
    assert ExternalApiUrls.__doc__  # dataclass generated a signature
    assert type_title(ExternalApiUrls) == ""


def test_type_title_not_inherited():
    assert type_title(UnixNotify) == ""


# ------------------------------------------------------------------------------
# attribute_docs
# ------------------------------------------------------------------------------


def test_attribute_docs_reads_docstrings_below_attributes():
    docs = attribute_docs(SectionsConfig)
    assert docs["app_name"] == "Application name"
    assert docs["dirs"] == "System directories"
    assert "external_api_urls" not in docs
    assert "db" not in docs


def test_attribute_docs_include_non_public_names():
    assert attribute_docs(ValuesConfig)["_filtered"] == "Filtered value"


def test_attribute_docs_subclass_overrides_base():
    @dataclass
    class Base:
        a: str = ""
        """Base title"""

    @dataclass
    class Child(Base):
        a: str = "x"
        """Child title"""

    assert attribute_docs(Child)["a"] == "Child title"


def test_attribute_docs_without_source_is_empty():
    Dynamic = type("Dynamic", (), {"a": 1})
    assert attribute_docs(Dynamic) == {}


def test_attribute_docs_keeps_raw_text():
    assert attribute_docs(TitledFields)["with_var"] == "@var str Typed title"
