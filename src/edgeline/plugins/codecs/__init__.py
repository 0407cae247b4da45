"""Built-in edge value codecs.

Codecs are accessed via PluginManager, not direct imports:
    manager = PluginManager()
    manager.register_builtin_plugins()
    codec_cls = manager.get_codec_by_name("long")
"""
