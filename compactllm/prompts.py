"""
System prompts for LLM communication.

Explains the compact input format to the model when structured context
is injected in compact form.
"""

# System prompt explaining compact input data
COMPACT_INPUT_PROMPT = """Structured input data is written in a compact notation, a quote-free form of JSON.

Compact Syntax:
• Objects: {key1:value1,key2:value2}
• Arrays: [value1,value2,value3]
• Strings: written as-is, without quotes
• Numbers: 42, 3.14
• Booleans: true, false
• Null: null

Notes:
• Line breaks inside strings appear as \\n and \\r
• Strings are not escaped otherwise, so a value may itself contain : , { } [ ]

Example:
   JSON: {"user": {"id": 123, "name": "Alice"}, "items": [1, 2, 3]}
   Compact: {user:{id:123,name:Alice},items:[1,2,3]}
"""
