# src/llm_blocks/observability/names.py

"""Standard metric names for llm-blocks observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# LLM Streaming Metrics
# ============================================================================

# Duration (request start to last fragment)
LLM_STREAM_DURATION = "llm_stream_duration"

# Counters
LLM_REQUESTS_TOTAL = "llm_requests_total"
LLM_ERRORS_TOTAL = "llm_errors_total"
LLM_STREAM_FRAGMENTS_TOTAL = "llm_stream_fragments_total"


# ============================================================================
# Block Parser Metrics
# ============================================================================

# Duration (first fragment pulled to last event yielded)
PARSER_STREAM_DURATION = "parser_stream_duration"

# Counters
PARSER_FRAGMENTS_TOTAL = "parser_fragments_total"
PARSER_BLOCKS_COMPLETED = "parser_blocks_completed"


# ============================================================================
# Agent Metrics
# ============================================================================

# Duration
AGENT_STEP_DURATION = "agent_step_duration"

# Counters
AGENT_STEPS_TOTAL = "agent_steps_total"
AGENT_STEP_ERRORS_TOTAL = "agent_step_errors_total"
