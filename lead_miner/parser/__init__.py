"""lead_miner.parser: HTML document model."""
