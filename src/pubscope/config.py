"""
Global Configuration and Defaults.

This module centralizes the fixed tables the resolver relies on: which
build configurations feed which publication scope, and how publication
scopes are written into package metadata.
"""

from typing import Dict

# --- Manifest ---
# Default manifest looked up by the CLI when none is given
DEFAULT_MANIFEST_NAME = "pubscope.toml"

# Extensions accepted as YAML exports of the same structure
YAML_SUFFIXES = {".yaml", ".yml"}

# Path of the root project in a multi-project build
ROOT_PROJECT_PATH = ":"

# --- Configurations ---
# The bucket whose dependencies are merged into the published artifact
RELOCATE_CONFIGURATION_NAME = "relocate"

# Configuration name -> scope name. Anything not listed is ignored.
SCOPE_TABLE: Dict[str, str] = {
    RELOCATE_CONFIGURATION_NAME: "relocate",
    # Compile-like buckets
    "compile": "compile",
    "implementation": "compile",
    "api": "compile",
    # Runtime
    "runtime": "runtime",
    # Not transitive for consumers
    "compileOnly": "provided",
    "runtimeOnly": "provided",
}

# --- Metadata ---
# Scope name -> scope written into POM <dependency> entries.
# Relocated dependencies are bundled and never written.
MAVEN_SCOPES: Dict[str, str] = {
    "compile": "compile",
    "runtime": "runtime",
    "provided": "provided",
}

# --- Defaults for [tool.pubscope] ---
DEFAULT_TRAVERSE_RELOCATED_PROJECTS = True
DEFAULT_RELOCATE_TRANSITIVE = True
