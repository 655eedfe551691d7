"""Test module for json_xml_converter package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import json_xml_converter

    # Assert
    assert json_xml_converter is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import json_xml_converter

    # Assert
    assert isinstance(json_xml_converter.__version__, str)
    assert json_xml_converter.__version__ == "0.1.0"


def test_package_has_author() -> None:
    """Test that the package has an author attribute."""
    # Arrange & Act
    import json_xml_converter

    # Assert
    assert json_xml_converter.__author__ == "JSON to XML Converter Team"


def test_package_all_exports() -> None:
    """Test that __all__ contains expected exports."""
    # Arrange & Act
    import json_xml_converter

    # Assert
    for name in (
        "convert",
        "convert_string",
        "convert_file",
        "JSONToXMLConverter",
        "JSONToXMLParser",
        "ConversionResult",
        "ConverterConfig",
        "ExitCode",
        "JSONSyntaxError",
    ):
        assert name in json_xml_converter.__all__
        assert hasattr(json_xml_converter, name)


def test_level_one_conversion() -> None:
    """Test the simplest entry point end to end."""
    # Arrange
    from json_xml_converter import convert

    # Act
    result = convert('{"greeting": "hello"}')

    # Assert
    assert result.success is True
    assert result.xml.endswith("<greeting>hello</greeting>\n")
