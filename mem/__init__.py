"""Matrix Element Method modules and the host interface they plug into."""
