"""Dataset adapters implementing the core DomainListSource port."""
