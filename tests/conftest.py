import pytest

from json_source_validator.models.schema_spec import (
    BOOLEAN,
    INTEGER,
    NUMBER,
    STRING,
    ArraySpec,
    ObjectSpec,
    ScalarSpec,
    UnionSpec,
    optional,
    required,
)


@pytest.fixture
def workflow_schema():
    """A small workflow-like schema: nodes in an array, free-form open objects."""
    node = ObjectSpec(
        fields={
            "id": required(STRING),
            "type": required(ScalarSpec("string", enum=("trigger", "action"))),
            "position": required(ArraySpec(NUMBER, min_items=2, max_items=2)),
            "disabled": optional(BOOLEAN, default=False),
        },
    )
    return ObjectSpec(
        fields={
            "name": required(STRING),
            "version": optional(INTEGER),
            "nodes": required(ArraySpec(node)),
            "settings": optional(
                ObjectSpec(fields={"timezone": optional(STRING), "timeout": optional(UnionSpec((INTEGER, STRING)))})
            ),
        },
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers the CLI installs so later tests do not write to closed capture streams."""
    import logging

    from json_source_validator.utils.logging_utils import PACKAGE_LOGGER_NAME

    yield
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
