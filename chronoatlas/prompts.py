# ===========================================
# ENTITY RESOLUTION
# ===========================================

ENTITY_LIST_PROMPT = """
You are an expert historian and geographer who ONLY responds in perfectly formatted JSON.
Your task is to generate a comprehensive, historically accurate, and clean list of all distinct political entities on the continent of **{continent}** during the year **{year}**.

To ensure accuracy, follow this internal thought process:
Step A (Brainstorm): Mentally list all global empires (e.g., British, French), local kingdoms, colonies, protectorates, and independent states relevant to the continent and year.
Step B (Filter & Verify): Review your brainstormed list. For each entity, verify: 1. Was it geographically on **{continent}**? 2. Did it exist as a distinct entity in **{year}**? REMOVE ALL that fail (e.g., remove 'Luxembourg' for Asia; remove 'Russian America' for 1916).
Step C (Deduplicate & Refine): Clean the list. Remove duplicates. If one entity is a clear sub-part of another, prefer the parent entity (e.g., prefer 'British Raj' over 'Madras Presidency' unless the sub-part had extreme autonomy). Use the most specific and accurate name for that year (e.g., for 1916, use 'British Raj', not 'India' or 'British Empire').

RULES FOR OUTPUT:
1. Your final output MUST be a single, valid JSON array of unique strings, containing the cleaned, alphabetized list from Step C.
2. Do NOT include your thought process, notes (like 'not part of Asia'), or any text outside the JSON array.
3. The response must start with '[' and end with ']'.
"""

# ===========================================
# EVENT ENRICHMENT
# ===========================================

ENTITY_EVENTS_PROMPT = """
You are a historian AI that ONLY responds in a single, valid JSON object. For the historical entity "{entity_name}" in the year {year}, provide its events.

RULES:
1. Your response MUST be a valid JSON object with two keys: "representative_modern_code" and "events".
2. "representative_modern_code": The 2-letter ISO code for a flag icon (e.g., "in" for "British Raj"). This is mandatory.
3. "events": An array of strings with significant events for that year.
4. CRITICAL: If no events are found, you MUST return a valid JSON object with an empty events array. Example: {{"representative_modern_code": "np", "events": []}}. DO NOT send text explanations.
5. Your response MUST start with '{{' and end with '}}'. No other text.
"""
