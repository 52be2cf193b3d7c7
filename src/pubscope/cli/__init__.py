"""pubscope command line interface."""
