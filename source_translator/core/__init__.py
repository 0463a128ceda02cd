"""Core translation pipeline.

- source: dialects that parse files into mutable trees and print them
- classifier: selects translation-target nodes
- translation: client + concurrent coordinator
- pipeline: per-file orchestration with fallback to the original text
- discovery: recursive file discovery for the CLI
"""
