"""
ChronoAtlas Services Package - LLM-backed generation of historic political maps.

Core Services:
- historic_events_orchestrator: Cache lookup and generation pipeline coordination
- entity_resolver: Entity list for a (year, continent)
- event_enricher: Flag code and events per entity
- cache_gateway: Payload cache contract and in-memory backend
- llm_service & llm_interface: Multi-provider LLM abstraction and management
"""
