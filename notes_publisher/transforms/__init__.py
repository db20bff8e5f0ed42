"""Transform factories for links and frontmatter."""
