from pytest_archon import archrule


def test_builder_is_driver_free() -> None:
    """
    Query building must stay pure: no database driver, no HTTP mapping.
    Only the executor talks to SQLAlchemy.
    """
    (
        archrule("builder_is_driver_free")
        .match("webutil_query.query")
        .match("webutil_query.compiler")
        .match("webutil_query.builder")
        .match("webutil_query.rebind")
        .match("webutil_query.lexer")
        .should_not_import("sqlalchemy*")
        .should_not_import("webutil_query.executor")
        .should_not_import("webutil_query.responses")
        .check("webutil_query", only_direct_imports=True)
    )


def test_lexer_is_a_leaf() -> None:
    """The SQL scanner knows nothing about descriptors, fields or errors."""
    (
        archrule("lexer_is_a_leaf")
        .match("webutil_query.lexer")
        .should_not_import("webutil_query.*")
        .check("webutil_query")
    )


def test_descriptors_isolation() -> None:
    """
    Descriptors and field config are plain data.
    They must not import the compiler, builder or orchestration layers.
    """
    (
        archrule("descriptors_isolation")
        .match("webutil_query.descriptors")
        .match("webutil_query.fields")
        .should_not_import("webutil_query.compiler")
        .should_not_import("webutil_query.builder")
        .should_not_import("webutil_query.query")
        .should_not_import("webutil_query.executor")
        .check("webutil_query", only_direct_imports=True)
    )


def test_errors_are_a_leaf() -> None:
    """The error vocabulary is importable from everywhere, so it imports nothing."""
    (
        archrule("errors_are_a_leaf")
        .match("webutil_query.exceptions")
        .should_not_import("webutil_query.*")
        .check("webutil_query")
    )
