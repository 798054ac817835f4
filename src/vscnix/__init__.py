"""Generate Nix manifest entries for installed VS Code extensions."""
