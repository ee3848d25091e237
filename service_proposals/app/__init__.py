"""
Proposal Gateway service package.

The gateway fronts the remote calculation engine:
- Credentials: bearer token issuance for outbound calls
- Liveness: a bounded-timeout health probe before every dispatch
- Dispatch: authenticated RPC to the engine's calculate endpoint
- Contingency: deferred outcome when the engine is unreachable

Structure:
- app.main: FastAPI app, routes, and service wiring.
- app.adapters: HTTP clients for the calculation engine.
- app.security: Credential issuance and claim decoding.
- app.domain: Proposal models and the orchestrator.
- app.background: Detached background work.
- app.pricing: Plan-based pricing strategies.
- app.persistence: In-memory quote records.
"""
