import importlib

mod = "schemaresolver"
class LazyLoader:
    """
    Lazy loader for the schemaresolver API so that importing the package
    does not pull in requests until a context is actually created.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item in self._mappings:
            module_name, attr_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, attr_name)
        try:
            return self._load_module(f"{mod}.{item}")
        except ModuleNotFoundError as e:
            raise AttributeError(f"module {mod!r} has no attribute {item!r}") from e

# Define the public names and their corresponding module paths
_mappings = {
    "ResolutionContext": (f"{mod}.resolutioncontext", "ResolutionContext"),
    "DocumentCache": (f"{mod}.documentcache", "DocumentCache"),
    "SchemeHandlerRegistry": (f"{mod}.handlerregistry", "SchemeHandlerRegistry"),
    "HttpURIHandler": (f"{mod}.urihandlers", "HttpURIHandler"),
    "FileURIHandler": (f"{mod}.urihandlers", "FileURIHandler"),
    "SchemaVersion": (f"{mod}.schemaversion", "SchemaVersion"),
    "detect_version": (f"{mod}.schemaversion", "detect_version"),
    "ANONYMOUS_ID": (f"{mod}.schemaid", "ANONYMOUS_ID"),
    "resolve_reference": (f"{mod}.refresolver", "resolve_reference"),
    "load_schema": (f"{mod}.refresolver", "load_schema"),
    "SchemaResolverError": (f"{mod}.errors", "SchemaResolverError"),
    "SchemaError": (f"{mod}.errors", "SchemaError"),
    "ResolutionError": (f"{mod}.errors", "ResolutionError"),
    "UnsupportedSchemeError": (f"{mod}.errors", "UnsupportedSchemeError"),
    "SchemaFetchError": (f"{mod}.errors", "SchemaFetchError"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
