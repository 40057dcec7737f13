"""
Question Paper Generation Pipeline
generation/

Steps:
1. Unit Index       — partition the question bank by (unit, kind)
2. Quota Check      — compare pool sizes with the mid1 / mid2 template, report every shortfall
3. Draw             — fresh Fisher-Yates shuffle per requirement, take the first `count`
4. Paper Assembler  — concatenate draws in template order, attach paper details
"""
