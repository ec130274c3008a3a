"""Repository provider package.

This package enumerates repositories from hosted source-control providers:
- github.py, gitlab.py, azure_devops.py: REST clients for each provider
- provider_adapters.py: uniform candidate listing and marker-file probe
- providers.py: source type to adapter lookup
- source_resolver.py: inclusion rules applied to one declared source
"""
