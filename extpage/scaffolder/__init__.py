"""Template replication and pruning.

Copies a three-variant template project into a fresh directory and removes
the files of the variants that were not chosen.

Quick usage::

    from extpage.scaffolder import prune, replicate, self_copy_guard

    ignore_paths = self_copy_guard(template_root, target_dir)
    await replicate(template_root, target_dir, {"node_modules"}, ignore_paths)
    await prune(target_dir, "history", registry)
"""

from extpage.scaffolder.pruner import prune, remove_path
from extpage.scaffolder.replicator import copy_aux_file, replicate, self_copy_guard
from extpage.scaffolder.templates import TemplateRenderer

__all__ = [
    "TemplateRenderer",
    "copy_aux_file",
    "prune",
    "remove_path",
    "replicate",
    "self_copy_guard",
]
