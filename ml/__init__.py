"""
ml: driving policies
====================

Modules
-------
policy
    The :class:`~ml.policy.Policy` capability interface and its
    implementations (:class:`NeuralNetwork`, :class:`RulePolicy`,
    :class:`ModelPolicy`).

Fitted models for :class:`~ml.policy.ModelPolicy` are looked up under
``ml/generated/`` by default.
"""
