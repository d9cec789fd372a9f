"""Desktop environment integration of an application bundle."""
