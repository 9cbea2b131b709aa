def session_identity(request):
    """Expose the signed-in identity to templates"""
    store = getattr(request, 'session_store', None)
    return {
        'identity': store.identity if store is not None else None,
    }
