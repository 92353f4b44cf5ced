from backend.src.ports.outbound.consent_flow_port import ConsentFlowPort, FederatedCredential
from backend.src.ports.outbound.document_store_port import DocumentStorePort
from backend.src.ports.outbound.identity_provider_port import AuthStateCallback, IdentityProviderPort

__all__ = [
    "AuthStateCallback",
    "IdentityProviderPort",
    "DocumentStorePort",
    "ConsentFlowPort",
    "FederatedCredential",
]
