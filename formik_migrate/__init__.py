"""formik-migrate: safe Formik to React Hook Form migration."""

__version__ = "0.1.0"
