"""Cross-app building blocks: domain kernel, event dispatch and API glue."""
