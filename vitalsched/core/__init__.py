"""
Core Layers

ingestion  - raw vitals and summary table readers
clinical   - status derivation and priority classification
scheduling - policy engine
reports    - plain-text report emitters
"""
