"""Layout engine: request builders, grid math and composers."""
