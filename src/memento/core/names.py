"""
Well-known type names referenced by the generator and the generated code.

Only the names matter here; the generator never loads these types.
"""

LIB_PACKAGE = "com.github.mttkay.memento"

RETAIN_ANNOTATION = f"{LIB_PACKAGE}.Retain"
MEMENTO_METHODS = f"{LIB_PACKAGE}.MementoMethods"
MEMENTO_SUFFIX = "$Memento"

OBJECT_TYPE = "java.lang.Object"
ACTIVITY_TYPE = "android.app.Activity"
FRAGMENT_ACTIVITY_TYPE = "android.support.v4.app.FragmentActivity"

LEGACY_FRAGMENT_IMPORT = "android.app.Fragment"
COMPAT_FRAGMENT_IMPORT = "android.support.v4.app.Fragment"
FRAGMENT_SIMPLE_NAME = "Fragment"
