"""
Tests for pubscope.toml manifest parsing.
"""

from pathlib import Path

import pytest

from pubscope.core.errors import ConfigurationError
from pubscope.core.manifest import BuildManifest, Relocation, ShadowSettings, parse_dependency
from pubscope.core.project import (
    DependencyConstraint,
    ExternalDependency,
    FileDependency,
    ProjectDependency,
)
from pubscope.core.types import Coordinate

MANIFEST = """
[tool.pubscope]
subject = ":core"
relocate_transitive = false

[tool.pubscope.shadow]
relocations = [
    "com.google.common",
    { pattern = "org.objectweb.asm", destination = "shaded.asm" },
]

[project]
name = "example"
group = "com.example"
version = "2.0.0"

[[project.subprojects]]
name = "core"

[project.subprojects.configurations.implementation]
dependencies = [
    "org.slf4j:slf4j-api:2.0.9",
    { project = ":util" },
    { files = ["libs/native.jar"] },
]
constraints = ["com.google.guava:guava"]

[project.subprojects.configurations.relocate]
dependencies = [{ group = "com.google.guava", name = "guava", version = "32.1.0-jre" }]

[project.subprojects.configurations.relocate.resolved]
roots = ["com.google.guava:guava:32.1.0-jre"]

[project.subprojects.configurations.relocate.resolved.children]
"com.google.guava:guava:32.1.0-jre" = [
    "com.google.guava:failureaccess:1.0.1",
    { coordinate = "org.checkerframework:checker-qual:3.33.0", configuration = "runtime" },
]

[[project.subprojects]]
name = "util"
version = "2.1.0"
artifact_name = "example-utilities"
"""


class TestBuildManifest:

    @pytest.fixture
    def manifest(self, tmp_path: Path) -> BuildManifest:
        path = tmp_path / "pubscope.toml"
        path.write_text(MANIFEST)
        return BuildManifest.load(path)

    def test_settings(self, manifest):
        assert manifest.settings.subject == ":core"
        assert manifest.settings.relocate_transitive is False
        assert manifest.settings.traverse_relocated_projects is True
        assert manifest.settings.shadow.relocations == [
            Relocation("com.google.common", "com.google.common"),
            Relocation("org.objectweb.asm", "shaded.asm"),
        ]

    def test_project_tree(self, manifest):
        root = manifest.root_project
        assert root.path == ":"
        assert [p.path for p in root.iter_projects()] == [":", ":core", ":util"]

        core = manifest.subject_project()
        assert core.path == ":core"
        assert (core.group, core.version) == ("com.example", "2.0.0")

        util = root.find(":util")
        assert util.version == "2.1.0"
        assert util.artifact_name == "example-utilities"

    def test_declared_dependencies(self, manifest):
        implementation = manifest.subject_project().configuration("implementation")
        assert implementation.dependencies == [
            ExternalDependency("org.slf4j", "slf4j-api", "2.0.9"),
            ProjectDependency(":util"),
            FileDependency(("libs/native.jar",)),
        ]
        assert implementation.constraints == [DependencyConstraint("com.google.guava", "guava", None)]

    def test_resolved_tree(self, manifest):
        resolved = manifest.subject_project().configuration("relocate").resolved
        guava = Coordinate.parse("com.google.guava:guava:32.1.0-jre")
        assert resolved.roots() == [guava]
        assert [(child.configuration, str(child.node)) for child in resolved.children(guava)] == [
            ("compile", "com.google.guava:failureaccess:1.0.1"),
            ("runtime", "org.checkerframework:checker-qual:3.33.0"),
        ]

    def test_yaml_export(self, tmp_path: Path):
        path = tmp_path / "build.yaml"
        path.write_text(
            "tool:\n"
            "  pubscope:\n"
            "    traverse_relocated_projects: false\n"
            "project:\n"
            "  name: app\n"
            "  group: com.example\n"
            "  version: '1.0'\n"
            "  configurations:\n"
            "    api:\n"
            "      dependencies:\n"
            "        - lib:core:1.0.0\n"
        )
        manifest = BuildManifest.load(path)
        assert manifest.settings.traverse_relocated_projects is False
        assert manifest.root_project.version == "1.0"
        assert manifest.root_project.configuration("api").dependencies == [
            ExternalDependency("lib", "core", "1.0.0")
        ]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigurationError, match="not found"):
            BuildManifest.load(tmp_path / "pubscope.toml")

    def test_malformed_toml(self, tmp_path: Path):
        path = tmp_path / "pubscope.toml"
        path.write_text("[project\nname = ")
        with pytest.raises(ConfigurationError, match="Failed to parse"):
            BuildManifest.load(path)

    def test_requires_project_table(self, tmp_path: Path):
        path = tmp_path / "pubscope.toml"
        path.write_text("[tool.pubscope]\nsubject = ':'\n")
        with pytest.raises(ConfigurationError, match=r"\[project\]"):
            BuildManifest.load(path)

    def test_unknown_subject(self, manifest):
        with pytest.raises(ConfigurationError):
            manifest.subject_project(":nope")

    def test_bad_notation_names_project(self):
        data = {
            "project": {
                "name": "app",
                "subprojects": [
                    {"name": "core", "configurations": {"api": {"dependencies": ["just-a-name"]}}},
                ],
            }
        }
        with pytest.raises(ConfigurationError) as exc:
            BuildManifest.from_dict(data)
        assert exc.value.project_path == ":core"
        assert "Project ':core'" in str(exc.value)

    def test_nested_paths(self):
        data = {
            "project": {
                "name": "app",
                "subprojects": [{"name": "libs", "subprojects": [{"name": "json"}]}],
            }
        }
        root = BuildManifest.from_dict(data).root_project
        assert root.find(":libs:json") is not None


class TestParseDependency:

    @pytest.mark.parametrize("value,expected", [
        ("g:n:1.0", ExternalDependency("g", "n", "1.0")),
        ("g:n", ExternalDependency("g", "n", None)),
        ({"project": ":core"}, ProjectDependency(":core")),
        ({"files": "a.jar"}, FileDependency(("a.jar",))),
        ({"name": "n", "version": "1"}, ExternalDependency(None, "n", "1")),
    ])
    def test_notations(self, value, expected):
        assert parse_dependency(value) == expected

    @pytest.mark.parametrize("value", [42, {"unknown": True}, "a:b:c:d"])
    def test_rejects_unknown_notation(self, value):
        with pytest.raises(ConfigurationError):
            parse_dependency(value)


class TestShadowSettings:

    def test_single_argument_rule(self):
        shadow = ShadowSettings()
        shadow.relocate("com.google")
        assert shadow.relocations == [Relocation("com.google", "com.google")]

    def test_invalid_rule(self):
        with pytest.raises(ConfigurationError):
            ShadowSettings.from_dict({"relocations": [{"destination": "x"}]})

    def test_disabled(self):
        assert ShadowSettings.from_dict({"enabled": False}).enabled is False


class TestManifestValidation:

    def test_yaml_numeric_version_is_text(self, tmp_path: Path):
        path = tmp_path / "build.yml"
        path.write_text(
            "project:\n"
            "  name: app\n"
            "  version: 2\n"
            "  configurations:\n"
            "    compile:\n"
            "      dependencies:\n"
            "        - {group: lib, name: a, version: 1.5}\n"
            "      constraints:\n"
            "        - {group: lib, name: b, version: 3}\n"
        )
        project = BuildManifest.load(path).root_project
        assert project.version == "2"
        compile_config = project.configuration("compile")
        assert compile_config.dependencies == [ExternalDependency("lib", "a", "1.5")]
        assert compile_config.constraints == [DependencyConstraint("lib", "b", "3")]

    def test_toml_integer_version_is_text(self, tmp_path: Path):
        path = tmp_path / "pubscope.toml"
        path.write_text(
            '[project]\nname = "app"\n\n'
            "[project.configurations.compile]\n"
            'dependencies = [{ group = "lib", name = "a", version = 2 }]\n'
        )
        dependencies = BuildManifest.load(path).root_project.configuration("compile").dependencies
        assert dependencies == [ExternalDependency("lib", "a", "2")]

    def test_configuration_must_be_a_table(self, tmp_path: Path):
        path = tmp_path / "pubscope.toml"
        path.write_text('[project]\nname = "app"\n\n[project.configurations]\ncompile = ["lib:a:1"]\n')
        with pytest.raises(ConfigurationError) as exc:
            BuildManifest.load(path)
        assert exc.value.project_path == ":"
        assert "configurations.compile" in exc.value.message

    @pytest.mark.parametrize("data,where", [
        ({"tool": ["pubscope"], "project": {"name": "app"}}, "'tool'"),
        ({"tool": {"pubscope": "on"}, "project": {"name": "app"}}, "tool.pubscope"),
        ({"tool": {"pubscope": {"shadow": []}}, "project": {"name": "app"}}, "tool.pubscope.shadow"),
        ({"project": "app"}, "'project'"),
        ({"project": {"name": "app", "subprojects": {"name": "core"}}}, "subprojects"),
        ({"project": {"name": "app", "subprojects": ["core"]}}, "subprojects"),
        ({"project": {"name": "app", "configurations": {"api": {"dependencies": "lib:a:1"}}}}, "dependencies"),
        (
            {"project": {"name": "app", "configurations": {"relocate": {"resolved": {"children": ["lib:a:1"]}}}}},
            "resolved.children",
        ),
    ])
    def test_wrong_shapes_raise_configuration_error(self, data, where):
        with pytest.raises(ConfigurationError, match=where):
            BuildManifest.from_dict(data)
