"""lead_miner.crawler: fetching, link collection and the breadth-first contact crawl."""
