from d42 import schema

PhaseStatusSchema = (schema.str('done') | schema.str('warned') | schema.str('skipped')
                     | schema.str('planned') | schema.str('failed'))

PhaseRecordSchema = schema.dict({
    'phase': schema.int.min(1).max(9),
    'title': schema.str,
    'status': PhaseStatusSchema,
    'warnings': schema.list(schema.str),
    'actions': schema.list(schema.str),
    'error': schema.none | schema.str,
})

DeployReportSchema = schema.dict({
    'success': schema.bool,
    'dry_run': schema.bool,
    'phases': schema.list(PhaseRecordSchema),
})
