"""
Components layer (prompt-centric).

- response contracts, one per feature (see `contracts.py`)
- a prompt template per feature (see `nomad_ai/prompts/*.j2`)
- contract validation of gateway output (see `response_validator.py`)
"""
