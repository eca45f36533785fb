"""golfile command line application."""
