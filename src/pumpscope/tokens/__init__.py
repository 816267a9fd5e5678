"""Token list post-processing: filtering, sorting and display formatting."""
