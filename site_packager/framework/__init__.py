"""Packaging building blocks.

Each step of the pipeline lives here as a plain function taking a
`PackagerConfig` and a logger:

- `site_packager.framework.detect`: framework vs static classification
- `site_packager.framework.strategies`: build-and-copy or copy-as-is
- `site_packager.framework.manifest`: temporary `homepage` override with restore
- `site_packager.framework.archive`: ZIP creation

The orchestration lives in `site_packager.app.package`.
"""
